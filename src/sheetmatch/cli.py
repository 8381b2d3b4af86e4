"""sheetmatch CLI -- accumulate and reconcile spreadsheets from the terminal."""

import logging
from datetime import datetime
from pathlib import Path

import click


def _console():
    from rich.console import Console

    return Console()


def _fail(console, exc):
    console.print(f"[red]Error: {exc}[/red]")
    raise SystemExit(1)


def _show_table(console, table, title, limit, first_index=0):
    from rich.table import Table

    view = Table(title=title)
    view.add_column("#", style="dim", justify="right")
    for i, header in enumerate(table.headers):
        view.add_column(header or f"col_{i}", style="cyan")
    for i, row in enumerate(table.rows[:limit]):
        view.add_row(str(first_index + i), *row)
    console.print(view)
    if len(table.rows) > limit:
        console.print(f"[dim]... {len(table.rows) - limit} more rows[/dim]")


def _dataset(ctx):
    from .store import MasterDataset

    return MasterDataset.from_settings(ctx.obj["settings"])


@click.group()
@click.version_option(package_name="sheetmatch")
@click.option("--data", "data_file", default=None, help="Master dataset file (xlsx).")
@click.option("--log-level", default=None, help="Logging level (default from settings).")
@click.pass_context
def cli(ctx, data_file, log_level):
    """sheetmatch -- Spreadsheet accumulation and key-based reconciliation."""
    from rich.logging import RichHandler

    from .config import get_settings

    settings = get_settings()
    if data_file:
        settings.data_file = data_file
    logging.basicConfig(
        level=(log_level or settings.log_level).upper(),
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@cli.command("import")
@click.argument("file", type=click.Path(exists=True))
@click.argument("second", required=False, type=click.Path(exists=True))
@click.pass_context
def import_(ctx, file, second):
    """Add a table to the master; with SECOND, join both on the order number first."""
    from rich.panel import Panel

    from .errors import SheetMatchError
    from .ingestion import load_table

    console = _console()
    settings = ctx.obj["settings"]
    dataset = _dataset(ctx)

    try:
        with console.status("Importing..."):
            first = load_table(file, pad_headers=settings.pad_headers)
            other = load_table(second, pad_headers=settings.pad_headers) if second else None
            result = dataset.import_uploads(first, other)
    except SheetMatchError as exc:
        _fail(console, exc)

    console.print(Panel(
        f"Incoming: {result.incoming_rows:,} rows  |  New: {result.appended_rows:,}  |  "
        f"Duplicates: {result.duplicate_rows:,}  |  Incomplete: {result.dropped_incomplete:,}\n"
        f"Master: {result.total_rows:,} rows  |  Columns: {len(result.headers)}",
        title="Import Complete",
    ))


@cli.command()
@click.argument("file", type=click.Path(exists=True))
@click.option("--category", "-c", default="", help="Restrict the master to this category first.")
@click.option("--output", "-o", default="", help="Output file (.xlsx or .csv).")
@click.pass_context
def match(ctx, file, category, output):
    """Match a table against the master on the configured match fields."""
    from rich.panel import Panel

    from .errors import SheetMatchError
    from .ingestion import load_table, save_table

    console = _console()
    settings = ctx.obj["settings"]
    dataset = _dataset(ctx)

    try:
        with console.status("Matching..."):
            probe = load_table(file, pad_headers=settings.pad_headers)
            result = dataset.match(probe, category)
    except SheetMatchError as exc:
        _fail(console, exc)

    stats = result.statistics
    console.print(Panel(
        f"Rows: {stats['target_rows']:,}  |  Strict: {stats['strict_matches']}  |  "
        f"Relaxed: {stats['relaxed_matches']}  |  Unmatched: {stats['unmatched']}\n"
        f"Match rate: {stats['match_rate_percent']}%",
        title="Match",
    ))

    output = output or f"matched_{datetime.now().strftime('%Y%m%d%H%M%S')}.xlsx"
    saved = save_table(result.table, output)
    console.print(f"Saved to: [bold]{saved}[/bold]")


@cli.command()
@click.argument("target", type=click.Path(exists=True))
@click.argument("source", type=click.Path(exists=True))
@click.option("--keys", "-k", required=True, help="Comma-separated key patterns, most significant first.")
@click.option("--matcher", "-m", default="regex", type=click.Choice(["regex", "substring", "exact"]))
@click.option("--drop-source-keys", is_flag=True, help="Remove the source's key columns from the output.")
@click.option("--output", "-o", default="", help="Output file (.xlsx or .csv).")
@click.option("--limit", "-n", default=10, help="Rows to preview.")
@click.pass_context
def reconcile(ctx, target, source, keys, matcher, drop_source_keys, output, limit):
    """Reconcile SOURCE rows into TARGET rows on key patterns."""
    from .engine import drop_columns, get_matcher, reconcile_report
    from .errors import SheetMatchError
    from .ingestion import load_table, save_table

    console = _console()
    settings = ctx.obj["settings"]
    patterns = [k.strip() for k in keys.split(",") if k.strip()]

    try:
        t = load_table(target, pad_headers=settings.pad_headers)
        s = load_table(source, pad_headers=settings.pad_headers)
        result = reconcile_report(t, s, patterns, get_matcher(matcher))
    except SheetMatchError as exc:
        _fail(console, exc)

    table = result.table
    if drop_source_keys:
        table = drop_columns(table, [len(t.headers) + s_idx for _, s_idx in result.key_columns])

    stats = result.statistics
    console.print(
        f"\n[bold]Reconciled {stats['target_rows']} rows[/bold] "
        f"({stats['strict_matches']} strict, {stats['relaxed_matches']} relaxed, "
        f"{stats['unmatched']} unmatched)\n"
    )
    _show_table(console, table, "Reconciled", limit)

    if output:
        console.print(f"Saved to: [bold]{save_table(table, output)}[/bold]")


@cli.command()
@click.option("--keyword", "-k", default="", help="Only rows with a cell matching this pattern.")
@click.option("--limit", "-n", default=50, help="Maximum rows to show.")
@click.pass_context
def show(ctx, keyword, limit):
    """Show the master dataset."""
    from .errors import SheetMatchError

    console = _console()
    try:
        table = _dataset(ctx).search(keyword)
    except SheetMatchError as exc:
        _fail(console, exc)

    if not table.headers:
        console.print("[yellow]Master dataset is empty.[/yellow]")
        return
    console.print(f"\n[bold]{len(table.rows)} rows[/bold]\n")
    _show_table(console, table, "Master", limit)


@cli.command()
@click.pass_context
def categories(ctx):
    """List the distinct values of the category column."""
    console = _console()
    settings = ctx.obj["settings"]
    values = _dataset(ctx).categories()

    if not values:
        console.print(f"[yellow]No values for '{settings.category_column}'.[/yellow]")
        return
    console.print(f"\n[bold]Found {len(values)} categories[/bold]\n")
    for value in values:
        console.print(f"  {value}")


@cli.command()
@click.argument("ids", nargs=-1, type=int, required=True)
@click.pass_context
def delete(ctx, ids):
    """Delete master rows by index (as listed by 'show')."""
    console = _console()
    removed = _dataset(ctx).delete_rows(ids)
    console.print(f"Deleted {removed} rows.")


@cli.command()
@click.confirmation_option(prompt="Remove every row of the master dataset?")
@click.pass_context
def clear(ctx):
    """Remove every row of the master dataset."""
    console = _console()
    _dataset(ctx).clear()
    console.print(f"[green]Cleared {Path(ctx.obj['settings'].data_file)}.[/green]")


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
