from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from columnist.core.config import ColumnistConfig
from columnist.core.exceptions import ColumnistError
from columnist.core.logging import setup_logging
from columnist.query import PostQueries, build_queries
from columnist.taxonomy import CHANNELS_CONFIG, Taxonomy
from columnist.taxonomy.validation import config_summary, validate_channels_config, validate_posts_classification

app = typer.Typer(
    name="columnist",
    help="Inspect the blog's posts, channels and columns",
    add_completion=False,
)

console = Console()

RootOption = Annotated[
    Path | None,
    typer.Option("--root", help="Site root holding .columnist.toml (defaults to the current directory)."),
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output.")] = False,
) -> None:
    """Configure logging for every command."""
    setup_logging("DEBUG" if verbose else "WARNING", console=Console(stderr=True))


def _load(root: Path | None) -> tuple[ColumnistConfig, PostQueries]:
    try:
        config = ColumnistConfig.load(root)
        if config.logging.file is not None:
            setup_logging(config.logging.level, log_file=config.logging.file, console=Console(stderr=True))
        return config, build_queries(config)
    except (ColumnistError, ValidationError) as exc:
        console.print(f"[bold red]{escape(str(exc))}[/bold red]")
        raise typer.Exit(code=1) from exc


def _status_icon(ok: bool) -> str:
    return "[bold green]✔[/bold green]" if ok else "[bold red]✘[/bold red]"


@app.command()
def posts(
    root: RootOption = None,
    channel: Annotated[str | None, typer.Option("--channel", help="Only posts of this channel.")] = None,
    column: Annotated[str | None, typer.Option("--column", help="Only posts of this column (needs --channel).")] = None,
):
    """
    List posts, pinned first then newest first.
    """
    _, queries = _load(root)
    table = Table()
    table.add_column("Slug", style="bold cyan")
    table.add_column("Date")
    table.add_column("Pinned")
    table.add_column("Column")
    table.add_column("Title")
    with queries:
        rows = queries.posts_by_column(channel, column) if column else queries.posts_by_channel(channel)
        for post in rows:
            ref = queries.taxonomy.resolve_column(post)
            table.add_row(
                post.slug,
                post.date.date().isoformat() if post.date else "-",
                "📌" if post.pinned else "",
                f"{ref.channel_key}/{ref.column_key}" if ref else "-",
                post.title,
            )
    table.title = f"{len(rows)} posts"
    console.print(table)


@app.command()
def show(
    slug: str = typer.Argument(..., help="Slug of the post (file name without extension)."),
    root: RootOption = None,
):
    """
    Show one post's metadata.
    """
    _, queries = _load(root)
    with queries:
        detail = queries.read_one(slug)
        if detail is None:
            console.print(f"[bold red]Post '{slug}' not found.[/bold red]")
            raise typer.Exit(code=1)
        channel = queries.taxonomy.resolve_channel(detail.frontmatter)
        ref = queries.taxonomy.resolve_column(detail.frontmatter)

    meta = detail.frontmatter
    console.print(f"[bold]{meta.title or detail.slug}[/bold]")
    for label, value in (
        ("slug", detail.slug),
        ("date", meta.date.isoformat() if meta.date else None),
        ("author", meta.author),
        ("tags", ", ".join(meta.tags)),
        ("pinned", str(meta.pinned)),
        ("channel", channel),
        ("column", "/".join(ref) if ref else None),
        ("body", f"{len(detail.content)} characters"),
    ):
        console.print(f"[bold cyan]{label}:[/] {value or '-'}")


@app.command()
def tags(root: RootOption = None):
    """
    Print every tag used by at least one post.
    """
    _, queries = _load(root)
    with queries:
        all_tags = queries.unique_tags()
    for tag in all_tags:
        console.print(tag)


@app.command()
def channels():
    """
    Summarize the channel and column configuration.
    """
    summary = config_summary(Taxonomy.from_config())
    table = Table(title=f"{summary.total_channels} channels / {summary.total_columns} columns")
    table.add_column("Channel", style="bold cyan")
    table.add_column("Name")
    table.add_column("Columns")
    for channel in summary.channels:
        table.add_row(channel.key, channel.name, ", ".join(channel.column_keys))
    console.print(table)


@app.command()
def check(root: RootOption = None):
    """
    Validate the channel configuration and every post's classification.
    """
    config_report = validate_channels_config(CHANNELS_CONFIG)
    console.print(f"{_status_icon(config_report.is_valid)} Channels configuration")
    for error in config_report.errors:
        console.print(f"  [red]{escape(error)}[/red]")
    if not config_report.is_valid:
        raise typer.Exit(code=1)

    _, queries = _load(root)
    with queries:
        posts_report = validate_posts_classification(queries.store.read_all(), queries.taxonomy)
    console.print(
        f"{_status_icon(posts_report.is_valid)} Posts: "
        f"{posts_report.valid_posts}/{posts_report.total_posts} valid"
    )
    for error in posts_report.errors:
        console.print(f"  [red]{escape(error)}[/red]")
    for warning in posts_report.warnings:
        console.print(f"  [yellow]{escape(warning)}[/yellow]")
    if not posts_report.is_valid:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
