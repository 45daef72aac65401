import logging
from typing import Union
from rich.console import Console
from rich.logging import RichHandler

def setup_logging(level: Union[str, int] = "INFO", show_path: bool = False):
    """Route log records to stderr through rich; reports and summaries stay on stdout."""
    if isinstance(level, str):
        level = level.upper()
    handler = RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=show_path)
    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=[handler])
    log = logging.getLogger("wct_xunit")
    log.setLevel(level)
    return log
