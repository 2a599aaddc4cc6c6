"""Coin ledger domain service.

Every change to a wallet balance goes through ``LedgerService.apply_delta``
so the balance always equals the sum of the wallet's transactions.
"""

import logging
from typing import Optional

from washbook.database.base import Database
from washbook.domain.entities import CREDIT, DEBIT, Wallet, WalletTransaction
from washbook.domain.errors import (
    InsufficientCoinsError,
    UserNotFoundError,
    ValidationError,
    insufficient_coins,
    user_not_found,
)

logger = logging.getLogger(__name__)


class LedgerService:
    """Service for reading and moving coin balances."""

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    def apply_delta(
        self,
        user_id: int,
        amount: int,
        description: str,
        service_id: Optional[int] = None,
        appointment_id: Optional[int] = None,
    ) -> str:
        """Credit (positive amount) or debit (negative amount) a wallet.

        Runs inside the caller's atomic unit, or opens its own when called
        on its own.

        Args:
            user_id: Wallet owner
            amount: Signed, non-zero number of coins
            description: Human-readable reason shown in the wallet history
            service_id: Optional service the entry relates to
            appointment_id: Optional appointment the entry relates to

        Returns:
            Wallet transaction ID

        Raises:
            ValidationError: If amount is zero or not an integer
            UserNotFoundError: If the user does not exist
            InsufficientCoinsError: If the debit would take the balance below zero
        """
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise ValidationError(f"Coin amount must be a whole number, got {amount!r}")
        if amount == 0:
            raise ValidationError("Coin amount must not be zero")

        with self.db.atomic():
            user = self.db.get_user(user_id, for_update=True)
            if user is None:
                raise UserNotFoundError(user_not_found(user_id))
            if user.wallet.coins + amount < 0:
                raise InsufficientCoinsError(
                    insufficient_coins(user_id, user.wallet.coins, -amount)
                )

            txn_id = self.db.append_wallet_transaction(
                user_id=user_id,
                amount=amount,
                type=CREDIT if amount > 0 else DEBIT,
                description=description,
                service_id=service_id,
                appointment_id=appointment_id,
            )

        logger.info(
            "Wallet %s %+d coins (%s), transaction %s", user_id, amount, description, txn_id
        )
        return txn_id

    def adjust_coins(self, user_id: int, amount: int, description: str) -> str:
        """Manual administrative adjustment.

        Args:
            user_id: Wallet owner
            amount: Coins to add (positive) or remove (negative)
            description: Reason for the adjustment, required

        Returns:
            Wallet transaction ID

        Raises:
            ValidationError: If description is empty or amount is zero
            UserNotFoundError: If the user does not exist
            InsufficientCoinsError: If removing more coins than the user has
        """
        if not description or not description.strip():
            raise ValidationError("A description is required for coin adjustments")
        return self.apply_delta(user_id, amount, description.strip())

    def get_wallet(self, user_id: int) -> Wallet:
        """Get a user's wallet.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        user = self.db.get_user(user_id)
        if user is None:
            raise UserNotFoundError(user_not_found(user_id))
        return user.wallet

    def list_transactions(self, user_id: int) -> list[WalletTransaction]:
        """List a user's wallet history, oldest first."""
        return list(self.get_wallet(user_id).transactions)

    def verify_wallet(self, user_id: int) -> bool:
        """Check that the balance matches the recorded history."""
        wallet = self.get_wallet(user_id)
        consistent = wallet.is_consistent()
        if not consistent:
            logger.warning(
                "Wallet %s out of balance: coins=%s, history=%s",
                user_id,
                wallet.coins,
                wallet.history_total(),
            )
        return consistent
