"""Appointment booking commands."""

import click
from washbook.cli.vendor_resolution import handle_domain_error, resolve_vendor_or_exit
from washbook.domain.booking import BookingService
from washbook.domain.catalog import CatalogService
from washbook.domain.entities import CustomerDetails
from washbook.domain.status import AppointmentStatus, parse_status, reward_eligible
from washbook.domain.user import UserService
from washbook.domain.vendor import VendorService
from washbook.utils.amount_parser import parse_amount
from washbook.utils.date_parser import parse_datetime

STATUS_CHOICES = [s.value for s in AppointmentStatus]


@click.group()
def appointment_group():
    """Book and manage appointments."""
    pass


@appointment_group.command("book")
@click.argument("vendor", metavar="VENDOR")
@click.argument("service_id", type=int)
@click.argument("customer_id", type=int)
@click.option("--date", "when", required=True, help="Date or date and time (e.g., 'tomorrow', '2024-05-01 14:30')")
@click.option("--time", "at", help="Time of day (e.g., 14:30), overrides any time in --date")
@click.option("--price", help="Total price after discounts (defaults to the service price)")
@click.option("--coins", type=int, default=0, show_default=True, help="Coins to redeem")
@click.option("--license-plate", help="Car license plate")
@click.option("--notes", help="Notes for the vendor")
@click.pass_context
def book_appointment(
    ctx,
    vendor: str,
    service_id: int,
    customer_id: int,
    when: str,
    at: str | None,
    price: str | None,
    coins: int,
    license_plate: str | None,
    notes: str | None,
):
    """Book SERVICE_ID at VENDOR for CUSTOMER_ID.

    Redeemed coins are deducted from the customer's wallet in the same step
    as the booking is stored.

    Examples:
        washbook appointment book "Shiny Wash" 3 7 --date tomorrow --time 10:00
        washbook appointment book 1 3 7 --date "2024-05-01 14:30" --coins 10 --price 40
    """
    db = ctx.obj["db"]
    vendor_id = resolve_vendor_or_exit(ctx, VendorService(db), vendor)
    booking = BookingService(db, ctx.obj["events"])

    try:
        start = parse_datetime(when, at=at)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        customer = UserService(db).require_user(customer_id)
        service = CatalogService(db).require_service(service_id)
        total_price = parse_amount(price) if price is not None else service.price
        appointment_id = booking.create_appointment(
            vendor_id=vendor_id,
            service_id=service_id,
            customer_id=customer_id,
            date=start,
            total_price=total_price,
            customer_details=CustomerDetails(
                first_name=customer.first_name,
                last_name=customer.last_name,
                email=customer.email,
                phone=customer.phone,
                license_plate=license_plate,
            ),
            notes=notes,
            coins_to_use=coins,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Booked appointment {appointment_id} on {start:%Y-%m-%d %H:%M}")
    if coins:
        click.echo(f"Redeemed {coins} coins")


@appointment_group.command("status")
@click.argument("appointment_id", type=int)
@click.argument("status", type=click.Choice(STATUS_CHOICES, case_sensitive=False))
@click.option("--reason", help="Cancellation reason")
@click.option("--strict", is_flag=True, help="Reject transitions outside the normal lifecycle")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def set_status(ctx, appointment_id: int, status: str, reason: str | None, strict: bool, yes: bool):
    """Change the status of an appointment.

    Completing an appointment credits the service's coin reward to the
    customer, once per appointment.

    Examples:
        washbook appointment status 12 completed --yes
        washbook appointment status 12 cancelled --reason "Customer called"
    """
    db = ctx.obj["db"]
    booking = BookingService(db, ctx.obj["events"])

    try:
        current = booking.require_appointment(appointment_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    new_status = parse_status(status)
    if not yes and reward_eligible(current.status, new_status, current.coin_reward_processed):
        reward = 0
        if current.service_id is not None:
            service = CatalogService(db).get_service(current.service_id)
            reward = service.coin_reward if service is not None else 0
        if not click.confirm(
            f"Mark appointment {appointment_id} as completed and credit {reward} coins to the customer?"
        ):
            click.echo("Status change cancelled.")
            return

    try:
        booking.update_appointment(
            appointment_id, status=new_status, cancel_reason=reason, strict=strict
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    updated = booking.require_appointment(appointment_id)
    click.echo(f"Appointment {appointment_id} is now {updated.status}")
    if updated.coin_reward_processed and not current.coin_reward_processed:
        click.echo(f"Credited {updated.coin_reward_amount} coins to the customer")


@appointment_group.command("list")
@click.option("--customer", "customer_id", type=int, help="Customer user ID")
@click.option("--vendor", help="Vendor business name or ID")
@click.pass_context
def list_appointments(ctx, customer_id: int | None, vendor: str | None):
    """List appointments of a customer or a vendor, newest first."""
    db = ctx.obj["db"]
    booking = BookingService(db)

    if (customer_id is None) == (vendor is None):
        click.echo("Error: Give exactly one of --customer or --vendor", err=True)
        ctx.exit(1)

    if customer_id is not None:
        appointments = booking.list_customer_appointments(customer_id)
    else:
        vendor_id = resolve_vendor_or_exit(ctx, VendorService(db), vendor)
        appointments = booking.list_vendor_appointments(vendor_id)

    if not appointments:
        click.echo("No appointments found.")
        return

    click.echo("\nAppointments:")
    click.echo("-" * 80)
    for a in appointments:
        details = a.customer_details
        click.echo(
            f"ID: {a.id:3d} | {a.date:%Y-%m-%d %H:%M} | {a.status.value:22s} | "
            f"{details.first_name} {details.last_name} | {a.total_price:.2f}"
        )


@appointment_group.command("show")
@click.argument("appointment_id", type=int)
@click.pass_context
def show_appointment(ctx, appointment_id: int):
    """Show appointment details."""
    booking = BookingService(ctx.obj["db"])

    try:
        a = booking.require_appointment(appointment_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    details = a.customer_details
    click.echo(f"Appointment {a.id}")
    click.echo(f"  Date:     {a.date:%Y-%m-%d %H:%M} ({a.duration} min)")
    click.echo(f"  Status:   {a.status}")
    click.echo(f"  Vendor:   {a.vendor_id}")
    click.echo(f"  Service:  {a.service_id}")
    click.echo(f"  Customer: {details.first_name} {details.last_name} <{details.email}>")
    if details.license_plate:
        click.echo(f"  Plate:    {details.license_plate}")
    click.echo(f"  Price:    {a.total_price:.2f} ({a.coins_used} coins used)")
    if a.coin_reward_processed:
        click.echo(f"  Reward:   {a.coin_reward_amount} coins")
    if a.cancel_reason:
        click.echo(f"  Reason:   {a.cancel_reason}")
    if a.feedback_rating is not None:
        click.echo(f"  Feedback: {a.feedback_rating}/5 {a.feedback_comment or ''}")


@appointment_group.command("feedback")
@click.argument("appointment_id", type=int)
@click.argument("rating", type=int)
@click.option("--comment", default="", help="Feedback comment")
@click.pass_context
def add_feedback(ctx, appointment_id: int, rating: int, comment: str):
    """Rate an appointment from 1 to 5."""
    booking = BookingService(ctx.obj["db"])

    try:
        booking.add_feedback(appointment_id, rating, comment)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Saved feedback for appointment {appointment_id}")


def register_commands(cli):
    """Register appointment commands with main CLI."""
    cli.add_command(appointment_group, name="appointment")
