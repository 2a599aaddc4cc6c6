"""Coin wallet commands."""

import click
from washbook.cli.vendor_resolution import handle_domain_error
from washbook.domain.ledger import LedgerService


@click.group()
def coins_group():
    """Inspect and adjust coin wallets."""
    pass


@coins_group.command("balance")
@click.argument("user_id", type=int)
@click.pass_context
def show_balance(ctx, user_id: int):
    """Show a user's coin balance."""
    ledger = LedgerService(ctx.obj["db"])

    try:
        wallet = ledger.get_wallet(user_id)
        consistent = ledger.verify_wallet(user_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"User {user_id} has {wallet.coins} coins")
    if not consistent:
        click.echo(
            f"Warning: balance does not match history total {wallet.history_total()}", err=True
        )


@coins_group.command("history")
@click.argument("user_id", type=int)
@click.pass_context
def show_history(ctx, user_id: int):
    """List a user's wallet transactions, oldest first."""
    ledger = LedgerService(ctx.obj["db"])

    try:
        transactions = ledger.list_transactions(user_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not transactions:
        click.echo("No transactions found.")
        return

    for txn in transactions:
        click.echo(f"{txn.timestamp:%Y-%m-%d %H:%M} | {txn.amount:+6d} | {txn.description}")


@coins_group.command("adjust")
@click.argument("user_id", type=int)
@click.option("--amount", type=int, required=True, help="Coins to add, or remove when negative")
@click.option("--description", required=True, help="Reason for the adjustment")
@click.pass_context
def adjust_coins(ctx, user_id: int, amount: int, description: str):
    """Manually add or remove coins.

    Examples:
        washbook coins adjust 7 --amount 25 --description "Apology for delay"
        washbook coins adjust 7 --amount=-10 --description "Correction"
    """
    ledger = LedgerService(ctx.obj["db"])

    try:
        ledger.adjust_coins(user_id, amount, description)
        wallet = ledger.get_wallet(user_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Adjusted user {user_id} by {amount:+d} coins, balance is now {wallet.coins}")


def register_commands(cli):
    """Register coin commands with main CLI."""
    cli.add_command(coins_group, name="coins")
