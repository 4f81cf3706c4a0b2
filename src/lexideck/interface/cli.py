"""lexideck CLI: study loop, scheduling commands and configuration."""

import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from lexideck.application.config import resolve_config
from lexideck.domain.constants import ONE_DAY_MS, ONE_HOUR_MS, ONE_MINUTE_MS
from lexideck.domain.exceptions import LexideckError
from lexideck.domain.models import Item, LearningDirection
from lexideck.interface._common import (
    _resolve_with_overrides,
    fail,
    open_session,
    parse_rating,
)

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="lexideck: spaced-repetition vocabulary trainer.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

config_app = typer.Typer(help="Manage lexideck configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Shared options
# ---------------------------------------------------------------------------

DirectionOption = Annotated[
    LearningDirection | None,
    typer.Option("--direction", "-d", help="primary (front first) or reverse (back first)."),
]
CatalogUrlOption = Annotated[str | None, typer.Option(help="CSV export URL of the word list.")]
CatalogPathOption = Annotated[Path | None, typer.Option(help="Local CSV word list.")]
ProgressPathOption = Annotated[Path | None, typer.Option(help="Progress JSON file.")]


def _format_interval(ms: int) -> str:
    if ms < ONE_HOUR_MS:
        return f"{round(ms / ONE_MINUTE_MS)} min"
    if ms < ONE_DAY_MS:
        return f"{ms / ONE_HOUR_MS:.1f} h"
    return f"{ms / ONE_DAY_MS:.1f} days"


def _item_json(item: Item, direction: LearningDirection) -> dict:
    return {
        "id": item.id,
        "prompt": item.prompt(direction),
        "answer": item.answer(direction),
    }


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 1,
):
    """Global settings for lexideck."""
    ctx.ensure_object(dict)
    ctx.obj["verbose_bonus"] = verbose


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def study(
    ctx: typer.Context,
    direction: DirectionOption = None,
    catalog_url: CatalogUrlOption = None,
    catalog_path: CatalogPathOption = None,
    progress_path: ProgressPathOption = None,
):
    """[bold green]Study[/bold green] until nothing is due and no new word can be admitted."""
    config = _resolve_with_overrides(
        direction=direction,
        catalog_url=catalog_url,
        catalog_path=catalog_path,
        progress_path=progress_path,
        verbose=ctx.obj.get("verbose_bonus", 1),
    )
    session = open_session(config)
    direction = config.direction
    reviewed = 0

    while True:
        item = session.next_item(direction)
        if item is None:
            break

        typer.echo("")
        typer.secho(item.prompt(direction), bold=True)
        typer.prompt("Press Enter to reveal", default="", show_default=False)
        typer.secho(item.answer(direction), fg="cyan")

        answer = typer.prompt("Rate [1=fail 2=hard 3=good 4=easy, q=quit]")
        if answer.strip().lower() in ("q", "quit"):
            break
        try:
            rating = parse_rating(answer)
        except typer.BadParameter as e:
            typer.secho(str(e), fg="yellow")
            continue

        record = session.rate(item.id, direction, rating)
        reviewed += 1
        typer.echo(f"Next review in {_format_interval(record.interval_ms)}.")

    summary = session.summary(direction)
    if item is None:
        typer.secho("\nAll done for now!", fg="green")
    typer.echo(
        f"Reviewed {reviewed}. New: {summary.new}  Fail: {summary.fail}  Hard: {summary.hard}"
        f"  Good: {summary.good}  Easy: {summary.easy}"
    )


@app.command("next")
def next_cmd(
    ctx: typer.Context,
    direction: DirectionOption = None,
    catalog_url: CatalogUrlOption = None,
    catalog_path: CatalogPathOption = None,
    progress_path: ProgressPathOption = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Show the item that should be reviewed next."""
    config = _resolve_with_overrides(
        direction=direction,
        catalog_url=catalog_url,
        catalog_path=catalog_path,
        progress_path=progress_path,
        verbose=ctx.obj.get("verbose_bonus", 1),
    )
    session = open_session(config)
    item = session.next_item(config.direction)

    if json_output:
        payload = _item_json(item, config.direction) if item else None
        typer.echo(json.dumps({"item": payload}, ensure_ascii=False, indent=2))
        return

    if item is None:
        typer.secho("Nothing to review right now.", fg="green")
        return

    typer.echo(f"{item.id}  {item.prompt(config.direction)}")


@app.command()
def rate(
    ctx: typer.Context,
    item_id: Annotated[str, typer.Argument(help="Item id as shown by 'lexideck next'.")],
    rating: Annotated[str, typer.Argument(help="fail, hard, good, easy (or 1-4).")],
    direction: DirectionOption = None,
    catalog_url: CatalogUrlOption = None,
    catalog_path: CatalogPathOption = None,
    progress_path: ProgressPathOption = None,
):
    """Record how well you recalled an item."""
    parsed = parse_rating(rating)
    config = _resolve_with_overrides(
        direction=direction,
        catalog_url=catalog_url,
        catalog_path=catalog_path,
        progress_path=progress_path,
        verbose=ctx.obj.get("verbose_bonus", 1),
    )
    session = open_session(config)

    try:
        record = session.rate(item_id, config.direction, parsed)
    except LexideckError as e:
        raise fail(e) from e

    typer.echo(
        f"{record.key}: {parsed.value}, reps={record.reps}, "
        f"next review in {_format_interval(record.interval_ms)}"
    )


@app.command()
def stats(
    ctx: typer.Context,
    direction: DirectionOption = None,
    catalog_url: CatalogUrlOption = None,
    catalog_path: CatalogPathOption = None,
    progress_path: ProgressPathOption = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Summarize progress for one direction."""
    config = _resolve_with_overrides(
        direction=direction,
        catalog_url=catalog_url,
        catalog_path=catalog_path,
        progress_path=progress_path,
        verbose=ctx.obj.get("verbose_bonus", 1),
    )
    session = open_session(config)
    summary = session.summary(config.direction)

    if json_output:
        typer.echo(json.dumps(summary.to_dict(), indent=2))
        return

    typer.echo(f"Direction: {summary.direction.value}  Items: {summary.total}")
    typer.echo(f"New: {summary.new}  Due: {summary.due}  In rotation: {summary.active}")
    for bucket, color in (("fail", "red"), ("hard", "yellow"), ("good", "green"), ("easy", "blue")):
        count = getattr(summary, bucket)
        typer.secho(
            f"  {bucket.capitalize():<5} {count:>5}  ({summary.fraction(bucket):.0%})", fg=color
        )


@app.command()
def cleanup(
    ctx: typer.Context,
    catalog_url: CatalogUrlOption = None,
    catalog_path: CatalogPathOption = None,
    progress_path: ProgressPathOption = None,
):
    """Remove progress for words that are no longer in the catalog."""
    config = _resolve_with_overrides(
        catalog_url=catalog_url,
        catalog_path=catalog_path,
        progress_path=progress_path,
        verbose=ctx.obj.get("verbose_bonus", 1),
    )
    removed = open_session(config).purged

    if removed:
        typer.secho(f"Removed {removed} orphaned progress entries.", fg="green")
    else:
        typer.echo("Nothing to clean up.")


@app.command()
def serve(
    port: Annotated[int, typer.Option(help="Port to bind the server to.")] = 8787,
    host: Annotated[str, typer.Option(help="Host to bind the server to.")] = "127.0.0.1",
    reload: Annotated[bool, typer.Option(help="Enable auto-reload.")] = False,
):
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("lexideck.server:app", host=host, port=port, reload=reload)


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    config = resolve_config()
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))
