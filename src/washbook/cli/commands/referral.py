"""Referral commands."""

import click
from washbook.cli.vendor_resolution import handle_domain_error
from washbook.domain.referral import REFERRED_BONUS, ReferralService


@click.group()
def referral_group():
    """Redeem referral codes."""
    pass


@referral_group.command("apply")
@click.argument("user_id", type=int)
@click.argument("code")
@click.pass_context
def apply_code(ctx, user_id: int, code: str):
    """Redeem another user's referral CODE for USER_ID.

    Both users receive coins. Each user can redeem one code.
    """
    service = ReferralService(ctx.obj["db"])

    try:
        service.apply_referral_code(user_id, code)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Referral code applied, user {user_id} received {REFERRED_BONUS} coins")


def register_commands(cli):
    """Register referral commands with main CLI."""
    cli.add_command(referral_group, name="referral")
