"""Transaction management commands."""

import click
from ledgerly.domain.entities import Transaction
from ledgerly.domain.errors import DomainError
from ledgerly.domain.split import SplitService, SplitSpec
from ledgerly.domain.transaction import TransactionService
from ledgerly.cli.error_handling import handle_domain_error, parse_amount_or_exit, parse_date_or_exit


def format_transaction_row(txn: Transaction) -> str:
    """One-line summary used by list views."""
    description = (txn.description or "")[:40]
    category = txn.category_name or ""
    marker = " [split]" if txn.is_split else ""
    return f"{txn.id:<9} {txn.date}  {description:<40} {txn.amount:>12,.2f}  {category}{marker}"


def echo_transaction(txn: Transaction) -> None:
    click.echo(f"Transaction ID: {txn.id}")
    if txn.parent_id:
        click.echo(f"  Split of: {txn.parent_id}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Amount: {txn.amount:,.2f}")
    click.echo(f"  Description: {txn.description or ''}")
    if txn.original_description:
        click.echo(f"  Original description: {txn.original_description}")
    click.echo(f"  Category: {txn.category_name or ''}")
    click.echo(f"  Group: {txn.group_name or ''}")
    if txn.tags:
        click.echo(f"  Tags: {', '.join(txn.tags)}")
    if txn.account_name:
        click.echo(f"  Account: {txn.account_name}")
    if txn.notes:
        click.echo(f"  Notes: {txn.notes}")
    click.echo(f"  Source: {txn.source or ''}")
    click.echo(f"  Quantity: {txn.quantity}")
    if txn.link:
        click.echo(f"  Link: {txn.link}")
    if txn.location:
        click.echo(f"  Location: {txn.location}")
    if txn.is_split:
        click.echo("  Split: yes")


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today', 'this month')")
@click.option("--category", "categories", multiple=True, help="Category name (repeatable)")
@click.option("--tag", "tags", multiple=True, help="Tag name (repeatable)")
@click.option("--all-tags", is_flag=True, help="Require every --tag instead of any")
@click.option("--min-amount", help="Minimum amount (inclusive)")
@click.option("--max-amount", help="Maximum amount (inclusive)")
@click.option("--limit", type=int, help="Show at most this many transactions")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    categories: tuple[str, ...],
    tags: tuple[str, ...],
    all_tags: bool,
    min_amount: str | None,
    max_amount: str | None,
    limit: int | None,
):
    """List transactions, most recent first.

    Examples:
        ledgerly transaction list --start-date "last month"
        ledgerly transaction list --tag vacation --tag 2019 --all-tags
    """
    service = TransactionService(ctx.obj["db"])

    start = parse_date_or_exit(ctx, start_date, "start date") if start_date else None
    end = parse_date_or_exit(ctx, end_date, "end date") if end_date else None
    low = parse_amount_or_exit(ctx, min_amount, "minimum amount") if min_amount else None
    high = parse_amount_or_exit(ctx, max_amount, "maximum amount") if max_amount else None

    try:
        transactions = service.list_transactions(
            start_date=start,
            end_date=end,
            categories=list(categories) or None,
            tags=list(tags) or None,
            match_all_tags=all_tags,
            min_amount=low,
            max_amount=high,
            limit=limit,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"Found {len(transactions)} transaction(s):")
    for txn in transactions:
        click.echo(format_transaction_row(txn))


@transaction_group.command("show")
@click.argument("transaction_id")
@click.pass_context
def show_transaction(ctx, transaction_id: str):
    """Show one transaction, with its split children."""
    service = TransactionService(ctx.obj["db"])
    try:
        txn = service.get_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    echo_transaction(txn)
    if txn.is_split:
        click.echo("\nSplits:")
        for child in SplitService(ctx.obj["db"]).list_splits(transaction_id):
            click.echo(format_transaction_row(child))


@transaction_group.command("add")
@click.option("--date", required=True, help="Transaction date (YYYY-MM-DD or relative like 'today')")
@click.option("--amount", required=True, help="Amount, negative for expenses (e.g., -42.50)")
@click.option("--id", "transaction_id", help="5-digit transaction ID (next free ID if omitted)")
@click.option("--description", help="Transaction description")
@click.option("--category", help="Category name (default: uncategorized)")
@click.option("--notes", help="Notes")
@click.option("--tag", "tags", multiple=True, help="Tag name (repeatable)")
@click.option("--account", "account_name", help="Account name")
@click.option("--quantity", type=int, default=1, show_default=True, help="Item count")
@click.pass_context
def add_transaction(
    ctx,
    date: str,
    amount: str,
    transaction_id: str | None,
    description: str | None,
    category: str | None,
    notes: str | None,
    tags: tuple[str, ...],
    account_name: str | None,
    quantity: int,
):
    """Add a transaction manually.

    Examples:
        ledgerly transaction add --date 2024-01-15 --amount -50.00 --category groceries
    """
    service = TransactionService(ctx.obj["db"])
    txn_date = parse_date_or_exit(ctx, date)
    txn_amount = parse_amount_or_exit(ctx, amount)

    try:
        new_id = service.create_transaction(
            date=txn_date,
            amount=txn_amount,
            transaction_id=transaction_id,
            description=description,
            category_name=category,
            notes=notes,
            tags=tags,
            account_name=account_name,
            quantity=quantity,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created transaction {new_id}")


@transaction_group.command("update")
@click.argument("transaction_id")
@click.option("--date", help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--amount", help="Transaction amount (e.g., 123.45 or -123.45)")
@click.option("--description", help="Transaction description")
@click.option("--category", help="Category name")
@click.option("--notes", help="Notes")
@click.option("--quantity", type=int, help="Item count")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: str,
    date: str | None,
    amount: str | None,
    description: str | None,
    category: str | None,
    notes: str | None,
    quantity: int | None,
):
    """Update a transaction.

    Updates only the fields that are provided.

    Examples:
        ledgerly transaction update 00042 --amount -75.00
        ledgerly transaction update 00042 --category restaurants
    """
    service = TransactionService(ctx.obj["db"])
    txn_date = parse_date_or_exit(ctx, date) if date is not None else None
    txn_amount = parse_amount_or_exit(ctx, amount) if amount is not None else None

    try:
        service.update_transaction(
            transaction_id=transaction_id,
            date=txn_date,
            amount=txn_amount,
            description=description,
            category_name=category,
            notes=notes,
            quantity=quantity,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_transaction(ctx, transaction_id: str, yes: bool):
    """Delete a transaction and its split children."""
    service = TransactionService(ctx.obj["db"])
    if not yes:
        click.confirm(f"Delete transaction {transaction_id}?", abort=True)
    try:
        service.delete_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


@transaction_group.command("split")
@click.argument("transaction_id")
@click.option(
    "--part",
    "parts",
    multiple=True,
    required=True,
    help="Child as AMOUNT or AMOUNT:CATEGORY (repeatable, in order)",
)
@click.pass_context
def split_transaction(ctx, transaction_id: str, parts: tuple[str, ...]):
    """Split a transaction into children whose amounts add up to it.

    Examples:
        ledgerly transaction split 00042 --part -20.00:groceries --part -22.50:household
    """
    specs = []
    for part in parts:
        amount_text, _, category = part.partition(":")
        amount = parse_amount_or_exit(ctx, amount_text, f"split amount '{part}'")
        specs.append(SplitSpec(amount=amount, category=category or None))

    try:
        result = SplitService(ctx.obj["db"]).split_transaction(transaction_id, specs)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Split transaction {transaction_id} into {len(result.children)} parts:")
    for child in result.children:
        click.echo(format_transaction_row(child))


@transaction_group.command("unsplit")
@click.argument("transaction_id")
@click.pass_context
def unsplit_transaction(ctx, transaction_id: str):
    """Remove a transaction's split children."""
    try:
        deleted = SplitService(ctx.obj["db"]).delete_split_transactions(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Removed {deleted} split(s) from transaction {transaction_id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
