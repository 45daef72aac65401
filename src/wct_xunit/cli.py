from typing import Optional
import typer
from .config import load_config, PluginConfig
from .errors import DoubleFinalizationError, MalformedEventError
from .events import parse_event
from .logging import setup_logging
from .plugin import XUnitPlugin
from .reporters.console import ConsoleReporter

app = typer.Typer(add_completion=False, help="WCT XUnit - XUnit XML reports from browser test runner events")

def _effective_config(config: Optional[str], output_dir: Optional[str] = None,
                      strict: bool = False, log_level: Optional[str] = None) -> PluginConfig:
    cfg = load_config(config)
    updates = {}
    if output_dir: updates["output_dir"] = output_dir
    if strict: updates["strict"] = True
    if log_level: updates["log_level"] = log_level
    return cfg.model_copy(update=updates)

@app.command()
def replay(
    events: typer.FileText = typer.Argument(..., help="JSON-lines event log, '-' for stdin"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config YAML"),
    output_dir: Optional[str] = typer.Option(None, "--out", "-o", help="Directory for the XUnit documents"),
    strict: bool = typer.Option(False, "--strict", help="Abort on internal invariant violations"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ..."),
):
    """Feed a recorded event stream through the reporter and write the reports."""
    cfg = _effective_config(config, output_dir, strict, log_level)
    log = setup_logging(cfg.log_level)
    plugin = XUnitPlugin(cfg)
    console = ConsoleReporter()
    malformed = 0

    for lineno, line in enumerate(events, 1):
        if not line.strip():
            continue
        try:
            event = parse_event(line)
        except MalformedEventError as e:
            log.error("line %d: %s", lineno, e)
            malformed += 1
            continue
        try:
            result = plugin.handle_event(event)
        except DoubleFinalizationError as e:
            typer.echo(f"Aborted at line {lineno}: {e}", err=True)
            raise typer.Exit(code=2)
        if result is not None:
            console.emit(result)

    for browser, file in plugin.open_groups():
        log.warning("%s never finished; no report for %s", browser, file)

    written = sum(len(r.written) for r in plugin.results)
    problems = malformed + len(plugin.errors) + sum(len(r.failures) for r in plugin.results)
    typer.echo(f"Done. {written} reports written, {problems} problems.")
    raise typer.Exit(code=0 if problems == 0 else 1)

@app.command("show-config")
def show_config(config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config YAML")):
    """Print the effective configuration."""
    typer.echo(_effective_config(config).model_dump_json(indent=2))
