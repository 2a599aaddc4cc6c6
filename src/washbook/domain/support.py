"""Support ticket domain service."""

import logging
from typing import Optional

from washbook.database.base import Database
from washbook.domain.entities import SupportTicket, TicketResponse
from washbook.domain.errors import (
    PreconditionFailedError,
    TicketNotFoundError,
    UserNotFoundError,
    ValidationError,
    ticket_not_found,
    user_not_found,
)

logger = logging.getLogger(__name__)

TICKET_STATUSES = ("open", "in_progress", "resolved", "closed")
TICKET_PRIORITIES = ("low", "medium", "high", "critical")


class SupportService:
    """Service for customer and vendor support tickets."""

    def __init__(self, db: Database):
        """Initialize support service.

        Args:
            db: Database instance
        """
        self.db = db

    def _require_ticket(self, ticket_id: int) -> SupportTicket:
        ticket = self.db.get_support_ticket(ticket_id)
        if ticket is None:
            raise TicketNotFoundError(ticket_not_found(ticket_id))
        return ticket

    def create_ticket(
        self,
        user_id: int,
        subject: str,
        message: str,
        category: str = "general",
        priority: str = "medium",
    ) -> int:
        """Open a support ticket on behalf of a user.

        The user's email and role are copied onto the ticket.

        Returns:
            Ticket ID

        Raises:
            ValidationError: If subject or message is empty or priority is unknown
            UserNotFoundError: If the user does not exist
        """
        if not subject.strip() or not message.strip():
            raise ValidationError("Subject and message are required")
        if priority not in TICKET_PRIORITIES:
            raise ValidationError(
                f"Unknown priority '{priority}'. Valid priorities: {', '.join(TICKET_PRIORITIES)}"
            )
        user = self.db.get_user(user_id)
        if user is None:
            raise UserNotFoundError(user_not_found(user_id))

        ticket_id = self.db.create_support_ticket(
            user_id=user_id,
            user_email=user.email,
            user_role=user.role,
            subject=subject.strip(),
            message=message.strip(),
            category=category,
            priority=priority,
        )
        logger.info("User %s opened support ticket %s", user_id, ticket_id)
        return ticket_id

    def get_ticket(self, ticket_id: int) -> Optional[SupportTicket]:
        """Get ticket by ID with its responses."""
        return self.db.get_support_ticket(ticket_id)

    def list_user_tickets(self, user_id: int) -> list[SupportTicket]:
        """List a user's tickets, newest first."""
        return self.db.list_support_tickets(user_id=user_id)

    def list_tickets(self, status: Optional[str] = None) -> list[SupportTicket]:
        """List all tickets, optionally only those with a given status."""
        if status is not None and status not in TICKET_STATUSES:
            raise ValidationError(
                f"Unknown ticket status '{status}'. Valid statuses: {', '.join(TICKET_STATUSES)}"
            )
        return self.db.list_support_tickets(status=status)

    def add_response(self, ticket_id: int, user_id: int, message: str) -> TicketResponse:
        """Post a reply on a ticket.

        Raises:
            ValidationError: If the message is empty
            TicketNotFoundError: If the ticket does not exist
            PreconditionFailedError: If the ticket is closed
            UserNotFoundError: If the responding user does not exist
        """
        if not message.strip():
            raise ValidationError("Response message is required")
        ticket = self._require_ticket(ticket_id)
        if ticket.status == "closed":
            raise PreconditionFailedError(f"Support ticket {ticket_id} is closed")
        user = self.db.get_user(user_id)
        if user is None:
            raise UserNotFoundError(user_not_found(user_id))

        return self.db.add_ticket_response(
            ticket_id, user_id=user_id, user_role=user.role, message=message.strip()
        )

    def set_status(self, ticket_id: int, status: str) -> None:
        """Change a ticket's status.

        Raises:
            ValidationError: If the status is unknown
            TicketNotFoundError: If the ticket does not exist
        """
        if status not in TICKET_STATUSES:
            raise ValidationError(
                f"Unknown ticket status '{status}'. Valid statuses: {', '.join(TICKET_STATUSES)}"
            )
        self._require_ticket(ticket_id)
        self.db.update_ticket_status(ticket_id, status)
        logger.info("Support ticket %s is now %s", ticket_id, status)

    def close_ticket(self, ticket_id: int) -> None:
        """Close a ticket."""
        self.set_status(ticket_id, "closed")
