"""
Event pages CLI entry point.

Usage:
    eventpages [OPTIONS] COMMAND [ARGS]...
"""

import asyncio
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from eventpages import __version__
from eventpages.catalog import CatalogEvent
from eventpages.core.config import EventPagesConfig, get_config
from eventpages.core.errors import EventPagesError
from eventpages.core.model import Model
from eventpages.core.transport import HttpxTransport
from eventpages.modules import MODULES, get_module

console = Console()
logger = logging.getLogger("eventpages")


def _configure_logging(config: EventPagesConfig, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.logging.level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=config.logging.format)


def _load_event(event_file: Path) -> CatalogEvent:
    try:
        return CatalogEvent.from_file(event_file)
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Unable to load event {event_file}: {e}") from e


@click.group()
@click.version_option(version=__version__, prog_name="eventpages")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx, verbose):
    """Event Pages - render event summary modules from a catalog event."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@cli.command()
@click.argument("event_file", required=False, type=click.Path(exists=True, path_type=Path))
def modules(event_file):
    """List registered modules."""
    event = _load_event(event_file) if event_file is not None else None
    model = Model({"event": event, "config": get_config()})

    table = Table(title="Event Page Modules")
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Types")
    if event is not None:
        table.add_column("Has Content")

    for module_id, module in MODULES.items():
        row = [module_id, module.TITLE, ", ".join(module.TYPES)]
        if event is not None:
            row.append("[green]yes[/green]" if module.has_content(model) else "[dim]no[/dim]")
        table.add_row(*row)

    console.print(table)


async def _drain_pending_tasks() -> None:
    """Wait for fetches scheduled by render (and any they schedule)."""
    current = asyncio.current_task()
    while True:
        pending = [task for task in asyncio.all_tasks() if task is not current and not task.done()]
        if not pending:
            return
        await asyncio.gather(*pending, return_exceptions=True)


async def _render_module(module_cls, model: Model, config: EventPagesConfig) -> str:
    async with HttpxTransport(config.transport) as transport:
        module = module_cls(model=model, transport=transport)
        try:
            module.render()
            await _drain_pending_tasks()
            return str(module.el.to_html())
        finally:
            module.destroy()


@cli.command()
@click.argument("event_file", type=click.Path(exists=True, path_type=Path))
@click.option("--module", "-m", "module_id", required=True, help="Module ID to render")
@click.option("--source", default=None, help="Product source")
@click.option("--code", default=None, help="Product code")
@click.option("--update-time", type=int, default=None, help="Product update time (ms)")
@click.option("--config", "config_path", type=click.Path(path_type=Path), default=None, help="Config file")
@click.option("--output", "-o", type=click.Path(path_type=Path), default=None, help="Write HTML to file")
@click.pass_context
def render(ctx, event_file, module_id, source, code, update_time, config_path, output):
    """Render one module of an event to HTML."""
    try:
        config = EventPagesConfig.from_file(config_path) if config_path else get_config()
    except EventPagesError as e:
        raise click.ClickException(e.message) from e
    _configure_logging(config, ctx.obj.get("verbose", False))

    module_cls = get_module(module_id)
    if module_cls is None:
        raise click.BadParameter(
            f"unknown module {module_id!r} (choose from {', '.join(MODULES)})",
            param_hint="--module",
        )

    event = _load_event(event_file)
    params = {"source": source, "code": code, "updateTime": update_time}
    model = Model({"event": event, "config": config, module_id: params})

    logger.info(f"Rendering {module_id} for {event.id or event_file}")
    html = asyncio.run(_render_module(module_cls, model, config))

    if output is not None:
        output.write_text(html, encoding="utf-8")
        console.print(f"[green]Wrote {output}[/green]")
    else:
        click.echo(html)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
