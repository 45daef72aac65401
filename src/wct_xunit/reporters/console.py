from ..flush import FlushResult
class ConsoleReporter:
    def emit(self, result: FlushResult) -> None:
        print(f"Browser: {result.browser}")
        for s in result.written:
            status = "FAIL" if s.failures else ("SKIP" if s.skipped == s.tests and s.tests else "PASS")
            print(f" - {s.suite}: {status} ({s.tests} tests, {s.failures} failed, {s.skipped} skipped) -> {s.document}")
        for f in result.failures:
            print(f" ! {f}")
