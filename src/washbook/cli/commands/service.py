"""Service catalog commands."""

import click
from washbook.cli.vendor_resolution import handle_domain_error, resolve_vendor_or_exit
from washbook.domain.catalog import CatalogService
from washbook.domain.vendor import VendorService
from washbook.utils.amount_parser import parse_amount


@click.group()
def service_group():
    """Manage vendor services and categories."""
    pass


@service_group.command("create")
@click.argument("vendor", metavar="VENDOR")
@click.argument("name")
@click.option("--price", required=True, help="Price (e.g., 49.90)")
@click.option("--duration", type=int, required=True, help="Duration in minutes")
@click.option("--description", default="", help="Service description")
@click.option("--category", help="Category name")
@click.option("--coin-reward", type=int, default=0, show_default=True, help="Coins earned on completion")
@click.option("--unavailable", is_flag=True, help="Create the service as not bookable")
@click.pass_context
def create_service(
    ctx,
    vendor: str,
    name: str,
    price: str,
    duration: int,
    description: str,
    category: str | None,
    coin_reward: int,
    unavailable: bool,
):
    """Create a service for VENDOR (business name or ID).

    Examples:
        washbook service create "Shiny Wash" "Basic wash" --price 19.90 --duration 30
        washbook service create 1 "Full detail" --price 149 --duration 180 --coin-reward 20
    """
    db = ctx.obj["db"]
    vendor_id = resolve_vendor_or_exit(ctx, VendorService(db), vendor)
    catalog = CatalogService(db)

    try:
        service_id = catalog.create_service(
            vendor_id=vendor_id,
            name=name,
            price=parse_amount(price),
            duration=duration,
            description=description,
            category=category,
            coin_reward=coin_reward,
            available=not unavailable,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created service '{name}' (ID: {service_id})")


@service_group.command("list")
@click.argument("vendor", metavar="VENDOR")
@click.pass_context
def list_services(ctx, vendor: str):
    """List the services of VENDOR."""
    db = ctx.obj["db"]
    vendor_id = resolve_vendor_or_exit(ctx, VendorService(db), vendor)

    services = CatalogService(db).list_vendor_services(vendor_id)
    if not services:
        click.echo("No services found.")
        return

    click.echo("\nServices:")
    click.echo("-" * 80)
    for s in services:
        flags = "" if s.available else " [unavailable]"
        click.echo(
            f"ID: {s.id:3d} | {s.name:25s} | {s.price:>8.2f} | {s.duration:3d} min | "
            f"+{s.coin_reward} coins{flags}"
        )


@service_group.command("recommended")
@click.option("--limit", type=int, default=5, show_default=True)
@click.pass_context
def recommended_services(ctx, limit: int):
    """List bookable services from verified vendors."""
    services = CatalogService(ctx.obj["db"]).recommended_services(limit=limit)
    if not services:
        click.echo("No services found.")
        return

    for s in services:
        click.echo(f"ID: {s.id:3d} | {s.name:25s} | {s.price:>8.2f} | vendor {s.vendor_id}")


@service_group.command("update")
@click.argument("service_id", type=int)
@click.option("--name", help="Service name")
@click.option("--description", help="Service description")
@click.option("--price", help="Price (e.g., 49.90)")
@click.option("--duration", type=int, help="Duration in minutes")
@click.option("--category", help="Category name")
@click.option("--coin-reward", type=int, help="Coins earned on completion")
@click.option("--available/--unavailable", default=None, help="Whether the service can be booked")
@click.pass_context
def update_service(
    ctx,
    service_id: int,
    name: str | None,
    description: str | None,
    price: str | None,
    duration: int | None,
    category: str | None,
    coin_reward: int | None,
    available: bool | None,
):
    """Update a service. Only the given fields change."""
    catalog = CatalogService(ctx.obj["db"])

    try:
        catalog.update_service(
            service_id,
            name=name,
            description=description,
            price=parse_amount(price) if price is not None else None,
            duration=duration,
            category=category,
            coin_reward=coin_reward,
            available=available,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated service {service_id}")


@service_group.command("delete")
@click.argument("service_id", type=int)
@click.pass_context
def delete_service(ctx, service_id: int):
    """Delete a service. Existing appointments are kept."""
    catalog = CatalogService(ctx.obj["db"])

    try:
        catalog.delete_service(service_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted service {service_id}")


@service_group.command("categories")
@click.argument("vendor", metavar="VENDOR")
@click.pass_context
def list_categories(ctx, vendor: str):
    """List the service categories of VENDOR in display order."""
    db = ctx.obj["db"]
    vendor_id = resolve_vendor_or_exit(ctx, VendorService(db), vendor)

    categories = CatalogService(db).list_categories(vendor_id)
    if not categories:
        click.echo("No categories found.")
        return

    for c in categories:
        click.echo(f"{c.order:2d}. {c.name} ({c.icon or '-'}) ID: {c.id}")


@service_group.command("add-category")
@click.argument("vendor", metavar="VENDOR")
@click.argument("name")
@click.option("--description", help="Category description")
@click.option("--icon", help="Icon name")
@click.option("--order", type=int, default=0, help="Display order")
@click.pass_context
def add_category(ctx, vendor: str, name: str, description: str | None, icon: str | None, order: int):
    """Add a service category for VENDOR."""
    db = ctx.obj["db"]
    vendor_id = resolve_vendor_or_exit(ctx, VendorService(db), vendor)

    try:
        category_id = CatalogService(db).create_category(
            vendor_id, name, description=description, icon=icon, order=order
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created category '{name}' (ID: {category_id})")


def register_commands(cli):
    """Register service commands with main CLI."""
    cli.add_command(service_group, name="service")
