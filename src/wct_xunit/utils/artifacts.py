import logging
import pathlib
from ..events import BrowserIdentity

log = logging.getLogger(__name__)

def report_name(template: str, browser: BrowserIdentity, file: str) -> str:
    # keep every report directly inside the output directory
    flat = file.replace("/", "_").replace("\\", "_")
    return template.format(file=flat, browser=browser.browser_name, version=browser.version)

class FileSink:
    """persist(name, content) backed by a directory on disk.

    Content goes to a temporary sibling first and is moved into place, so a
    failed write never leaves a truncated report behind.
    """
    def __init__(self, output_dir: str):
        self.output_dir = pathlib.Path(output_dir)
    def __call__(self, name: str, content: str) -> None:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / name
        tmp = path.with_name(path.name + ".tmp")
        try:
            tmp.write_text(content, encoding="utf-8")
            tmp.replace(path)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise
        log.debug("Wrote %s (%d bytes)", path, len(content))
