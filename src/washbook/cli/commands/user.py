"""User management commands."""

import click
from washbook.cli.vendor_resolution import handle_domain_error
from washbook.domain.user import ROLES, UserService


@click.group()
def user_group():
    """Manage users."""
    pass


@user_group.command("create")
@click.argument("email")
@click.argument("first_name")
@click.argument("last_name")
@click.option("--role", type=click.Choice(ROLES), default="customer", show_default=True)
@click.option("--phone", help="Phone number")
@click.pass_context
def create_user(ctx, email: str, first_name: str, last_name: str, role: str, phone: str | None):
    """Create a new user.

    Customers receive a welcome bonus in their coin wallet.

    Examples:
        washbook user create anna@example.com Anna Virtanen
        washbook user create owner@wash.fi Pekka Laine --role vendor
    """
    service = UserService(ctx.obj["db"], ctx.obj["events"])

    try:
        user_id = service.create_user(
            email=email, first_name=first_name, last_name=last_name, role=role, phone=phone
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    user = service.get_user(user_id)
    click.echo(f"Created {role} '{user.full_name}' (ID: {user_id})")
    click.echo(f"Referral code: {user.referral_code}")
    if user.wallet.coins:
        click.echo(f"Coins: {user.wallet.coins}")


@user_group.command("list")
@click.option("--role", type=click.Choice(ROLES), help="Only list users with this role")
@click.pass_context
def list_users(ctx, role: str | None):
    """List users."""
    service = UserService(ctx.obj["db"])

    users = service.list_users(role=role)
    if not users:
        click.echo("No users found.")
        return

    click.echo("\nUsers:")
    click.echo("-" * 80)
    for u in users:
        flags = " [banned]" if u.banned else ""
        click.echo(
            f"ID: {u.id:3d} | {u.full_name:25s} | {u.email:30s} | {u.role:8s} | "
            f"Coins: {u.wallet.coins}{flags}"
        )


@user_group.command("show")
@click.argument("user_id", type=int)
@click.pass_context
def show_user(ctx, user_id: int):
    """Show a user's profile and wallet summary."""
    service = UserService(ctx.obj["db"])

    try:
        u = service.require_user(user_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"User {u.id}: {u.full_name}")
    click.echo(f"  Email:         {u.email}")
    click.echo(f"  Role:          {u.role}")
    if u.phone:
        click.echo(f"  Phone:         {u.phone}")
    click.echo(f"  Verified:      {'yes' if u.verified else 'no'}")
    click.echo(f"  Banned:        {'yes' if u.banned else 'no'}")
    click.echo(f"  Coins:         {u.wallet.coins}")
    click.echo(f"  Referral code: {u.referral_code} (used by {u.referral_count})")
    if u.used_referral_code:
        click.echo(f"  Redeemed code: {u.used_referral_code}")


@user_group.command("ban")
@click.argument("user_id", type=int)
@click.option("--unban", is_flag=True, help="Lift an existing ban")
@click.pass_context
def ban_user(ctx, user_id: int, unban: bool):
    """Ban or unban a user."""
    service = UserService(ctx.obj["db"])

    try:
        service.set_banned(user_id, not unban)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"User {user_id} {'unbanned' if unban else 'banned'}")


@user_group.command("delete")
@click.argument("user_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_user(ctx, user_id: int, yes: bool):
    """Delete a user together with their appointments and wallet history."""
    service = UserService(ctx.obj["db"])

    try:
        u = service.require_user(user_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(f"Are you sure you want to delete user '{u.email}' (ID: {user_id})?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_user(user_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted user '{u.email}'")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
