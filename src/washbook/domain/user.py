"""User domain service."""

import logging
import uuid
from typing import Optional

from washbook.database.base import Database
from washbook.domain.entities import User as UserEntity
from washbook.domain.errors import (
    ConflictError,
    UserNotFoundError,
    ValidationError,
    duplicate_email,
    user_not_found,
)
from washbook.domain.events import EventBus, UserRegistered
from washbook.domain.ledger import LedgerService

logger = logging.getLogger(__name__)

ROLES = ("customer", "vendor", "admin")

WELCOME_BONUS = 10
WELCOME_DESCRIPTION = "Welcome bonus for new members"


def generate_referral_code() -> str:
    """Return a fresh 8-character referral code."""
    return uuid.uuid4().hex[:8]


class UserService:
    """Service for managing users."""

    def __init__(self, db: Database, events: Optional[EventBus] = None):
        """Initialize user service.

        Args:
            db: Database instance
            events: Event bus that receives UserRegistered for new customers
        """
        self.db = db
        self.events = events if events is not None else EventBus()
        self.ledger = LedgerService(db)

    def create_user(
        self,
        email: str,
        first_name: str,
        last_name: str,
        role: str = "customer",
        phone: Optional[str] = None,
    ) -> int:
        """Create a user.

        Customers start with a welcome bonus credited through the ledger;
        vendors and admins start with an empty wallet.

        Args:
            email: Unique email address
            first_name: First name
            last_name: Last name
            role: customer, vendor or admin
            phone: Optional phone number

        Returns:
            User ID

        Raises:
            ValidationError: If role or email is invalid
            ConflictError: If the email is already registered
        """
        email = email.strip()
        if role not in ROLES:
            raise ValidationError(f"Unknown role '{role}'. Valid roles: {', '.join(ROLES)}")
        if "@" not in email:
            raise ValidationError(f"Invalid email address '{email}'")
        if self.db.get_user_by_email(email) is not None:
            raise ConflictError(duplicate_email(email))

        referral_code = generate_referral_code()
        while self.db.get_user_by_referral_code(referral_code) is not None:
            referral_code = generate_referral_code()

        with self.db.atomic():
            user_id = self.db.create_user(
                email=email,
                first_name=first_name,
                last_name=last_name,
                role=role,
                referral_code=referral_code,
                phone=phone,
            )
            if role == "customer":
                self.ledger.apply_delta(user_id, WELCOME_BONUS, WELCOME_DESCRIPTION)

        logger.info("Created %s user %s (%s)", role, user_id, email)
        if role == "customer":
            self.events.publish(UserRegistered(user=self.db.get_user(user_id)))
        return user_id

    def get_user(self, user_id: int) -> Optional[UserEntity]:
        """Get user by ID.

        Returns:
            User entity or None if not found
        """
        return self.db.get_user(user_id)

    def require_user(self, user_id: int) -> UserEntity:
        """Get user by ID or raise UserNotFoundError."""
        user = self.db.get_user(user_id)
        if user is None:
            raise UserNotFoundError(user_not_found(user_id))
        return user

    def list_users(self, role: Optional[str] = None) -> list[UserEntity]:
        """List users, optionally only those with a given role."""
        return self.db.list_users(role=role)

    def update_user(
        self,
        user_id: int,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> None:
        """Update profile fields.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        self.require_user(user_id)
        self.db.update_user(user_id, first_name=first_name, last_name=last_name, phone=phone)

    def set_banned(self, user_id: int, banned: bool) -> None:
        """Ban or unban a user."""
        self.require_user(user_id)
        self.db.update_user(user_id, banned=banned)
        logger.info("User %s %s", user_id, "banned" if banned else "unbanned")

    def set_verified(self, user_id: int, verified: bool) -> None:
        """Mark a user's email as verified or not."""
        self.require_user(user_id)
        self.db.update_user(user_id, verified=verified)

    def delete_user(self, user_id: int) -> None:
        """Delete a user with their appointments, wallet history and vendors.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        self.require_user(user_id)
        with self.db.atomic():
            self.db.delete_user(user_id)
        logger.info("Deleted user %s", user_id)
