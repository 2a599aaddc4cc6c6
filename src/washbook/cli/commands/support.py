"""Support ticket commands."""

import click
from washbook.cli.vendor_resolution import handle_domain_error
from washbook.domain.support import TICKET_PRIORITIES, TICKET_STATUSES, SupportService


@click.group()
def support_group():
    """Manage support tickets."""
    pass


@support_group.command("create")
@click.argument("user_id", type=int)
@click.argument("subject")
@click.argument("message")
@click.option("--category", default="general", show_default=True)
@click.option("--priority", type=click.Choice(TICKET_PRIORITIES), default="medium", show_default=True)
@click.pass_context
def create_ticket(ctx, user_id: int, subject: str, message: str, category: str, priority: str):
    """Open a support ticket for USER_ID."""
    service = SupportService(ctx.obj["db"])

    try:
        ticket_id = service.create_ticket(
            user_id, subject, message, category=category, priority=priority
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Opened support ticket {ticket_id}")


@support_group.command("list")
@click.option("--user", "user_id", type=int, help="Only tickets of this user")
@click.option("--status", type=click.Choice(TICKET_STATUSES), help="Only tickets with this status")
@click.pass_context
def list_tickets(ctx, user_id: int | None, status: str | None):
    """List support tickets, newest first."""
    service = SupportService(ctx.obj["db"])

    if user_id is not None:
        tickets = service.list_user_tickets(user_id)
        if status is not None:
            tickets = [t for t in tickets if t.status == status]
    else:
        tickets = service.list_tickets(status=status)

    if not tickets:
        click.echo("No support tickets found.")
        return

    for t in tickets:
        click.echo(
            f"ID: {t.id:3d} | {t.status:11s} | {t.priority:8s} | {t.user_email:25s} | {t.subject}"
        )


@support_group.command("show")
@click.argument("ticket_id", type=int)
@click.pass_context
def show_ticket(ctx, ticket_id: int):
    """Show a ticket and its responses."""
    ticket = SupportService(ctx.obj["db"]).get_ticket(ticket_id)
    if ticket is None:
        click.echo(f"Error: Support ticket {ticket_id} not found", err=True)
        ctx.exit(1)

    click.echo(f"Ticket {ticket.id}: {ticket.subject} [{ticket.status}, {ticket.priority}]")
    click.echo(f"From {ticket.user_email} ({ticket.user_role}):")
    click.echo(f"  {ticket.message}")
    for r in ticket.responses:
        click.echo(f"{r.created_at:%Y-%m-%d %H:%M} {r.user_role}: {r.message}")


@support_group.command("respond")
@click.argument("ticket_id", type=int)
@click.argument("user_id", type=int)
@click.argument("message")
@click.pass_context
def respond(ctx, ticket_id: int, user_id: int, message: str):
    """Post MESSAGE on a ticket as USER_ID."""
    service = SupportService(ctx.obj["db"])

    try:
        service.add_response(ticket_id, user_id, message)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Added response to ticket {ticket_id}")


@support_group.command("status")
@click.argument("ticket_id", type=int)
@click.argument("status", type=click.Choice(TICKET_STATUSES))
@click.pass_context
def set_status(ctx, ticket_id: int, status: str):
    """Change a ticket's status."""
    service = SupportService(ctx.obj["db"])

    try:
        service.set_status(ticket_id, status)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Ticket {ticket_id} is now {status}")


@support_group.command("close")
@click.argument("ticket_id", type=int)
@click.pass_context
def close_ticket(ctx, ticket_id: int):
    """Close a ticket."""
    service = SupportService(ctx.obj["db"])

    try:
        service.close_ticket(ticket_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Closed ticket {ticket_id}")


def register_commands(cli):
    """Register support commands with main CLI."""
    cli.add_command(support_group, name="support")
