"""Vendor management commands."""

import click
from washbook.cli.vendor_resolution import handle_domain_error, resolve_vendor_or_exit
from washbook.domain.vendor import VendorService


@click.group()
def vendor_group():
    """Manage vendors."""
    pass


@vendor_group.command("create")
@click.argument("user_id", type=int)
@click.argument("business_name")
@click.option("--business-id", required=True, help="Business ID (must be unique)")
@click.option("--address", required=True, help="Street address")
@click.option("--postal-code", required=True, help="Postal code")
@click.option("--city", required=True, help="City")
@click.option("--phone", "phone_number", required=True, help="Phone number (must be unique)")
@click.option("--email", help="Contact email")
@click.option("--description", help="Business description")
@click.pass_context
def create_vendor(
    ctx,
    user_id: int,
    business_name: str,
    business_id: str,
    address: str,
    postal_code: str,
    city: str,
    phone_number: str,
    email: str | None,
    description: str | None,
):
    """Create a vendor profile owned by USER_ID.

    The vendor starts unverified and gets a default set of service categories.

    Examples:
        washbook vendor create 2 "Shiny Wash" --business-id 1234567-8 \\
            --address "Main St 1" --postal-code 00100 --city Helsinki --phone 0401234567
    """
    service = VendorService(ctx.obj["db"])

    try:
        vendor_id = service.create_vendor(
            user_id=user_id,
            business_name=business_name,
            business_id=business_id,
            address=address,
            postal_code=postal_code,
            city=city,
            phone_number=phone_number,
            email=email,
            description=description,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created vendor '{business_name}' (ID: {vendor_id})")
    click.echo("The vendor is unverified until approved with 'vendor verify'.")


@vendor_group.command("list")
@click.option("--all", "include_banned", is_flag=True, help="Include banned vendors")
@click.pass_context
def list_vendors(ctx, include_banned: bool):
    """List vendors."""
    service = VendorService(ctx.obj["db"])

    vendors = service.list_vendors(include_banned=include_banned)
    if not vendors:
        click.echo("No vendors found.")
        return

    click.echo("\nVendors:")
    click.echo("-" * 80)
    for v in vendors:
        flags = []
        if not v.verified:
            flags.append("unverified")
        if v.banned:
            flags.append("banned")
        suffix = f" [{', '.join(flags)}]" if flags else ""
        click.echo(
            f"ID: {v.id:3d} | {v.business_name:25s} | {v.city:15s} | "
            f"Rating: {v.rating:.1f} ({v.rating_count}){suffix}"
        )


@vendor_group.command("show")
@click.argument("vendor", metavar="VENDOR")
@click.pass_context
def show_vendor(ctx, vendor: str):
    """Show vendor details. VENDOR can be a business name or ID."""
    service = VendorService(ctx.obj["db"])
    vendor_id = resolve_vendor_or_exit(ctx, service, vendor)
    v = service.require_vendor(vendor_id)

    click.echo(f"Vendor {v.id}: {v.business_name}")
    click.echo(f"  Business ID: {v.business_id}")
    click.echo(f"  Address:     {v.address}, {v.postal_code} {v.city}")
    click.echo(f"  Phone:       {v.phone_number}")
    if v.email:
        click.echo(f"  Email:       {v.email}")
    if v.description:
        click.echo(f"  About:       {v.description}")
    click.echo(f"  Rating:      {v.rating:.1f} ({v.rating_count} reviews)")
    click.echo(f"  Verified:    {'yes' if v.verified else 'no'}")
    click.echo(f"  Banned:      {'yes' if v.banned else 'no'}")


@vendor_group.command("verify")
@click.argument("vendor", metavar="VENDOR")
@click.option("--unverify", is_flag=True, help="Remove verification")
@click.pass_context
def verify_vendor(ctx, vendor: str, unverify: bool):
    """Verify a vendor so it shows up in searches."""
    service = VendorService(ctx.obj["db"])
    vendor_id = resolve_vendor_or_exit(ctx, service, vendor)

    try:
        service.set_verified(vendor_id, not unverify)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Vendor {vendor_id} {'unverified' if unverify else 'verified'}")


@vendor_group.command("ban")
@click.argument("vendor", metavar="VENDOR")
@click.option("--unban", is_flag=True, help="Lift an existing ban")
@click.pass_context
def ban_vendor(ctx, vendor: str, unban: bool):
    """Ban or unban a vendor. Banned vendors cannot take bookings."""
    service = VendorService(ctx.obj["db"])
    vendor_id = resolve_vendor_or_exit(ctx, service, vendor)

    try:
        service.set_banned(vendor_id, not unban)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Vendor {vendor_id} {'unbanned' if unban else 'banned'}")


@vendor_group.command("search")
@click.argument("query")
@click.option("--city", help="Only vendors in this city")
@click.pass_context
def search_vendors(ctx, query: str, city: str | None):
    """Search verified vendors by the services they offer.

    Examples:
        washbook vendor search "interior"
        washbook vendor search wax --city Espoo
    """
    service = VendorService(ctx.obj["db"])

    vendors = service.search_vendors(query, city=city)
    if not vendors:
        click.echo("No vendors found.")
        return

    for v in vendors:
        click.echo(f"ID: {v.id:3d} | {v.business_name:25s} | {v.address}, {v.city}")


@vendor_group.command("delete")
@click.argument("vendor", metavar="VENDOR")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_vendor(ctx, vendor: str, yes: bool):
    """Delete a vendor with its services, categories and appointments."""
    service = VendorService(ctx.obj["db"])
    vendor_id = resolve_vendor_or_exit(ctx, service, vendor)
    v = service.require_vendor(vendor_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete vendor '{v.business_name}' (ID: {vendor_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_vendor(vendor_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted vendor '{v.business_name}'")


def register_commands(cli):
    """Register vendor commands with main CLI."""
    cli.add_command(vendor_group, name="vendor")
