class XUnitError(Exception):
    """Base class for everything the reporter raises on purpose."""


class MalformedEventError(XUnitError, ValueError):
    """An upstream event that cannot be classified into a (file, suite, case)."""


class DoubleFinalizationError(XUnitError, RuntimeError):
    """A report group was asked to serialize a second time."""


class PersistFailure(XUnitError):
    def __init__(self, name: str, cause: Exception):
        super().__init__(f"Could not persist {name!r}: {cause}")
        self.name = name
        self.cause = cause


class BrowserFlushedError(XUnitError):
    """An event arrived for a browser whose reports were already written."""
