"""Category management commands."""

import click
from ledgerly.domain.category import CategoryService
from ledgerly.domain.errors import DomainError
from ledgerly.cli.error_handling import handle_domain_error


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.option("--group", "group_name", help="Only categories of this group")
@click.pass_context
def list_categories(ctx, group_name: str | None):
    """List categories, grouped."""
    service = CategoryService(ctx.obj["db"])

    if group_name is not None:
        try:
            categories = service.list_categories(group_name=group_name)
        except DomainError as e:
            handle_domain_error(ctx, e)
        for cat in categories:
            click.echo(f"{cat.name} (ID: {cat.id})")
        return

    for group in service.list_grouped():
        click.echo(f"{group.name} (ID: {group.id})")
        for cat in group.categories:
            click.echo(f"  {cat.name} (ID: {cat.id})")


@category_group.command("create")
@click.argument("name")
@click.option("--group", "group_name", help="Group name (default: ungrouped)")
@click.pass_context
def create_category(ctx, name: str, group_name: str | None):
    """Create a new category."""
    service = CategoryService(ctx.obj["db"])
    try:
        category_id = service.create_category(name=name, group_name=group_name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    group_str = f" in group '{group_name}'" if group_name else ""
    click.echo(f"Created category '{name}'{group_str} (ID: {category_id})")


@category_group.command("rename")
@click.argument("current_name")
@click.argument("new_name")
@click.option("--merge", is_flag=True, help="Merge into NEW_NAME if it already exists")
@click.pass_context
def rename_category(ctx, current_name: str, new_name: str, merge: bool):
    """Rename a category, moving its transactions along."""
    service = CategoryService(ctx.obj["db"])
    try:
        service.rename_category(current_name, new_name, merge=merge)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Renamed category '{current_name}' to '{new_name}'")


@category_group.command("move")
@click.argument("name")
@click.argument("group_name")
@click.pass_context
def move_category(ctx, name: str, group_name: str):
    """Move a category to another group."""
    service = CategoryService(ctx.obj["db"])
    try:
        service.move_category(name, group_name)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Moved category '{name}' to group '{group_name}'")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
