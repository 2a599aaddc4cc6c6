"""Vendor offer commands."""

import click
from washbook.cli.vendor_resolution import handle_domain_error, resolve_vendor_or_exit
from washbook.domain.offer import DEFAULT_DISCOUNT_PERCENTAGE, OfferService
from washbook.domain.vendor import VendorService
from washbook.utils.amount_parser import parse_amount
from washbook.utils.date_parser import parse_datetime

# Offers run until the end of their last day
END_OF_DAY = "23:59"


def _parse_range(start: str | None, end: str | None):
    return (
        parse_datetime(start) if start is not None else None,
        parse_datetime(end, at=END_OF_DAY) if end is not None else None,
    )


@click.group()
def offer_group():
    """Manage vendor offers."""
    pass


@offer_group.command("create")
@click.argument("vendor", metavar="VENDOR")
@click.argument("title")
@click.option("--description", required=True, help="Offer details")
@click.option("--start", default="today", show_default=True, help="First day (e.g., 'today', '2024-06-01')")
@click.option("--end", required=True, help="Last day, inclusive")
@click.option("--service", "service_id", type=int, help="Service the offer applies to")
@click.option("--discount", type=int, default=DEFAULT_DISCOUNT_PERCENTAGE, show_default=True, help="Discount percentage")
@click.option("--price", help="Offer price (e.g., 39.90)")
@click.option("--original-price", help="Price before the offer")
@click.option("--inactive", is_flag=True, help="Create the offer hidden")
@click.pass_context
def create_offer(
    ctx,
    vendor: str,
    title: str,
    description: str,
    start: str,
    end: str,
    service_id: int | None,
    discount: int,
    price: str | None,
    original_price: str | None,
    inactive: bool,
):
    """Create an offer for VENDOR (business name or ID).

    Examples:
        washbook offer create "Shiny Wash" "Summer deal" --description "Full wash -20%" --end 2024-08-31 --discount 20
    """
    db = ctx.obj["db"]
    vendor_id = resolve_vendor_or_exit(ctx, VendorService(db), vendor)

    try:
        start_date, end_date = _parse_range(start, end)
        offer_id = OfferService(db).create_offer(
            vendor_id=vendor_id,
            title=title,
            description=description,
            start_date=start_date,
            end_date=end_date,
            service_id=service_id,
            discount_percentage=discount,
            price=parse_amount(price) if price is not None else None,
            original_price=parse_amount(original_price) if original_price is not None else None,
            active=not inactive,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created offer '{title}' (ID: {offer_id})")


@offer_group.command("list")
@click.argument("vendor", metavar="VENDOR")
@click.option("--running", is_flag=True, help="Only offers that apply right now")
@click.pass_context
def list_offers(ctx, vendor: str, running: bool):
    """List the offers of VENDOR, latest start first."""
    db = ctx.obj["db"]
    vendor_id = resolve_vendor_or_exit(ctx, VendorService(db), vendor)
    offers = OfferService(db)

    results = offers.running_offers(vendor_id) if running else offers.list_vendor_offers(vendor_id)
    if not results:
        click.echo("No offers found.")
        return

    click.echo("\nOffers:")
    click.echo("-" * 80)
    for o in results:
        status = "" if o.active else " (inactive)"
        click.echo(
            f"{o.id:4d}  {o.start_date:%Y-%m-%d} - {o.end_date:%Y-%m-%d}  "
            f"{o.discount_percentage:3d}%  {o.title}{status}"
        )


@offer_group.command("update")
@click.argument("offer_id", type=int)
@click.option("--title", help="Headline")
@click.option("--description", help="Offer details")
@click.option("--start", help="First day")
@click.option("--end", help="Last day, inclusive")
@click.option("--service", "service_id", type=int, help="Service the offer applies to")
@click.option("--discount", type=int, help="Discount percentage")
@click.option("--price", help="Offer price")
@click.option("--original-price", help="Price before the offer")
@click.option("--active/--inactive", default=None, help="Show or hide the offer")
@click.pass_context
def update_offer(
    ctx,
    offer_id: int,
    title: str | None,
    description: str | None,
    start: str | None,
    end: str | None,
    service_id: int | None,
    discount: int | None,
    price: str | None,
    original_price: str | None,
    active: bool | None,
):
    """Update an offer. Only the given fields change."""
    offers = OfferService(ctx.obj["db"])

    try:
        start_date, end_date = _parse_range(start, end)
        offers.update_offer(
            offer_id,
            title=title,
            description=description,
            start_date=start_date,
            end_date=end_date,
            service_id=service_id,
            discount_percentage=discount,
            price=parse_amount(price) if price is not None else None,
            original_price=parse_amount(original_price) if original_price is not None else None,
            active=active,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated offer {offer_id}")


def register_commands(cli):
    """Register offer commands with main CLI."""
    cli.add_command(offer_group, name="offer")
