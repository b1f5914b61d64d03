"""Tag management commands."""

import click
from ledgerly.domain.errors import DomainError
from ledgerly.domain.tag import TagService
from ledgerly.cli.error_handling import handle_domain_error


@click.group()
def tag_group():
    """Manage tags."""
    pass


@tag_group.command("list")
@click.pass_context
def list_tags(ctx):
    """List all tags."""
    tags = TagService(ctx.obj["db"]).list_tags()
    if not tags:
        click.echo("No tags found.")
        return
    for tag in tags:
        click.echo(f"{tag.name} (ID: {tag.id})")


@tag_group.command("create")
@click.argument("name")
@click.pass_context
def create_tag(ctx, name: str):
    """Create a new tag."""
    try:
        tag_id = TagService(ctx.obj["db"]).create_tag(name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created tag '{name}' (ID: {tag_id})")


@tag_group.command("set")
@click.argument("transaction_id")
@click.argument("tags", nargs=-1)
@click.pass_context
def set_tags(ctx, transaction_id: str, tags: tuple[str, ...]):
    """Replace a transaction's tags (no tags clears them).

    Examples:
        ledgerly tag set 00042 vacation 2019
    """
    try:
        current = TagService(ctx.obj["db"]).set_transaction_tags(transaction_id, tags)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Tags for {transaction_id}: {', '.join(current) or 'none'}")


def register_commands(cli):
    """Register tag commands with main CLI."""
    cli.add_command(tag_group, name="tag")
