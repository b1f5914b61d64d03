"""Group management commands."""

import click
from ledgerly.domain.errors import DomainError
from ledgerly.domain.group import GroupService
from ledgerly.cli.error_handling import handle_domain_error


@click.group()
def group_group():
    """Manage category groups."""
    pass


@group_group.command("list")
@click.option("--with-categories", is_flag=True, help="Show each group's categories")
@click.pass_context
def list_groups(ctx, with_categories: bool):
    """List all groups."""
    service = GroupService(ctx.obj["db"])
    if with_categories:
        for group in service.list_with_categories():
            names = ", ".join(cat.name for cat in group.categories)
            click.echo(f"{group.name}: {names}")
        return

    for group in service.list_groups():
        click.echo(f"{group.name} (ID: {group.id})")


@group_group.command("create")
@click.argument("name")
@click.pass_context
def create_group(ctx, name: str):
    """Create a new group."""
    service = GroupService(ctx.obj["db"])
    try:
        group_id = service.create_group(name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created group '{name}' (ID: {group_id})")


def register_commands(cli):
    """Register group commands with main CLI."""
    cli.add_command(group_group, name="group")
