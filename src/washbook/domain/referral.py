"""Referral domain service."""

import logging

from washbook.database.base import Database
from washbook.domain.errors import (
    InvalidReferralCodeError,
    ReferralAlreadyUsedError,
    SelfReferralNotAllowedError,
    UserNotFoundError,
    invalid_referral_code,
    referral_already_used,
    self_referral,
    user_not_found,
)
from washbook.domain.ledger import LedgerService

logger = logging.getLogger(__name__)

REFERRER_BONUS = 20
REFERRED_BONUS = 15

REFERRER_DESCRIPTION = "Referral reward"
REFERRED_DESCRIPTION = "Referral code bonus"


class ReferralService:
    """Service for redeeming referral codes."""

    def __init__(self, db: Database):
        """Initialize referral service.

        Args:
            db: Database instance
        """
        self.db = db
        self.ledger = LedgerService(db)

    def apply_referral_code(self, user_id: int, referral_code: str) -> bool:
        """Redeem a referral code, rewarding both users in one atomic unit.

        Args:
            user_id: User redeeming the code
            referral_code: Code owned by the referring user

        Returns:
            True once both wallets are credited

        Raises:
            InvalidReferralCodeError: If nobody owns the code
            SelfReferralNotAllowedError: If the code belongs to the redeeming user
            UserNotFoundError: If the redeeming user does not exist
            ReferralAlreadyUsedError: If the user already redeemed a code
        """
        code = referral_code.strip()
        referrer = self.db.get_user_by_referral_code(code)
        if referrer is None:
            raise InvalidReferralCodeError(invalid_referral_code(code))
        if referrer.id == user_id:
            raise SelfReferralNotAllowedError(self_referral(code))

        with self.db.atomic():
            user = self.db.get_user(user_id, for_update=True)
            if user is None:
                raise UserNotFoundError(user_not_found(user_id))
            if user.used_referral_code:
                raise ReferralAlreadyUsedError(
                    referral_already_used(user_id, user.used_referral_code)
                )

            self.ledger.apply_delta(referrer.id, REFERRER_BONUS, REFERRER_DESCRIPTION)
            self.db.increment_referral_count(referrer.id)
            self.ledger.apply_delta(user_id, REFERRED_BONUS, REFERRED_DESCRIPTION)
            self.db.update_user(user_id, used_referral_code=code)

        logger.info("User %s redeemed referral code of user %s", user_id, referrer.id)
        return True
