"""Ingestion commands: reconcile, unify and load the source exports."""

import click
from ledgerly.domain.errors import DomainError
from ledgerly.domain.loader import LoaderService, LoadResult
from ledgerly.cli.error_handling import handle_domain_error
from ledgerly.ingest import (
    reconcile_sources,
    read_unified_csv,
    unify_sources,
    write_unified_csv,
)
from ledgerly.ingest.reconciler import read_overlaps, write_overlaps

DEFAULT_MINT_CSV = "db/original-csv/mint/mint_transactions.csv"
DEFAULT_EVERYDOLLAR_DIR = "db/original-csv/everydollar"
DEFAULT_OVERLAPS_JSON = "db/overlappingCategories.json"
DEFAULT_UNIFIED_CSV = "db/unified.csv"

mint_option = click.option(
    "--mint",
    "mint_path",
    type=click.Path(dir_okay=False),
    default=DEFAULT_MINT_CSV,
    show_default=True,
    help="Mint transactions export",
)
everydollar_option = click.option(
    "--everydollar",
    "everydollar_dir",
    type=click.Path(file_okay=False),
    default=DEFAULT_EVERYDOLLAR_DIR,
    show_default=True,
    help="Directory of EveryDollar CSV exports",
)
overlaps_option = click.option(
    "--overlaps",
    "overlaps_path",
    type=click.Path(dir_okay=False),
    default=DEFAULT_OVERLAPS_JSON,
    show_default=True,
    help="Overlapping categories JSON file",
)
unified_option = click.option(
    "--unified",
    "unified_path",
    type=click.Path(dir_okay=False),
    default=DEFAULT_UNIFIED_CSV,
    show_default=True,
    help="Unified CSV file",
)


def echo_load_result(result: LoadResult) -> None:
    click.echo("\nLoad complete:")
    click.echo(f"  Groups: {result.groups}")
    click.echo(f"  Categories: {result.categories}")
    click.echo(f"  Tags: {result.tags}")
    click.echo(f"  Inserted: {result.inserted} transactions")
    click.echo(f"  Already present: {result.existing}")
    click.echo(f"  Tag links: {result.tag_links}")
    if result.errors:
        click.echo(f"  Skipped: {result.skipped}")
        for error in result.errors:
            click.echo(f"    {error}", err=True)


@click.command("reconcile")
@mint_option
@everydollar_option
@overlaps_option
@click.pass_context
def reconcile(ctx, mint_path: str, everydollar_dir: str, overlaps_path: str):
    """Find Mint categories that EveryDollar also knows, with their group."""
    try:
        overlaps = reconcile_sources(mint_path, everydollar_dir)
        write_overlaps(overlaps_path, overlaps)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Found {len(overlaps)} overlapping categories, written to {overlaps_path}")


@click.command("unify")
@mint_option
@everydollar_option
@overlaps_option
@unified_option
@click.pass_context
def unify(ctx, mint_path: str, everydollar_dir: str, overlaps_path: str, unified_path: str):
    """Merge both exports into one numbered CSV, most recent first."""
    try:
        records = unify_sources(mint_path, everydollar_dir, read_overlaps(overlaps_path))
        written = write_unified_csv(unified_path, records)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Wrote {written} unified transactions to {unified_path}")


@click.command("load")
@unified_option
@click.pass_context
def load(ctx, unified_path: str):
    """Load the unified CSV into the database."""
    service = LoaderService(ctx.obj["db"])
    try:
        result = service.load(read_unified_csv(unified_path))
    except DomainError as e:
        handle_domain_error(ctx, e)
    echo_load_result(result)


@click.command("ingest")
@mint_option
@everydollar_option
@overlaps_option
@unified_option
@click.pass_context
def ingest(ctx, mint_path: str, everydollar_dir: str, overlaps_path: str, unified_path: str):
    """Run reconcile, unify and load in one go."""
    service = LoaderService(ctx.obj["db"])
    try:
        overlaps = reconcile_sources(mint_path, everydollar_dir)
        write_overlaps(overlaps_path, overlaps)
        records = unify_sources(mint_path, everydollar_dir, overlaps)
        write_unified_csv(unified_path, records)
        result = service.load(records)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Reconciled {len(overlaps)} categories, unified {len(records)} transactions")
    echo_load_result(result)


def register_commands(cli):
    """Register ingestion commands with main CLI."""
    cli.add_command(reconcile)
    cli.add_command(unify)
    cli.add_command(load)
    cli.add_command(ingest)
