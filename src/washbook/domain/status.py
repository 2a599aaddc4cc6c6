"""Appointment status values and the normal lifecycle between them."""

from enum import Enum

from washbook.domain.errors import ValidationError, invalid_status


class AppointmentStatus(str, Enum):
    """Lifecycle state of an appointment."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    CANCELLED_BY_CUSTOMER = "cancelled_by_customer"
    NO_SHOW = "no_show"

    def __str__(self) -> str:
        return self.value

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset(
    {
        AppointmentStatus.COMPLETED,
        AppointmentStatus.CANCELLED,
        AppointmentStatus.CANCELLED_BY_CUSTOMER,
        AppointmentStatus.NO_SHOW,
    }
)

# Normal lifecycle, enforced only for strict updates. Open appointments can
# move anywhere. Closed ones can only be reopened, plus the no-show ->
# completed correction for a customer who turned up late.
ALLOWED_TRANSITIONS: dict[AppointmentStatus, frozenset[AppointmentStatus]] = {
    AppointmentStatus.PENDING: frozenset(AppointmentStatus) - {AppointmentStatus.PENDING},
    AppointmentStatus.CONFIRMED: frozenset(AppointmentStatus) - {AppointmentStatus.CONFIRMED},
    AppointmentStatus.COMPLETED: frozenset({AppointmentStatus.CONFIRMED}),
    AppointmentStatus.CANCELLED: frozenset({AppointmentStatus.CONFIRMED}),
    AppointmentStatus.CANCELLED_BY_CUSTOMER: frozenset({AppointmentStatus.CONFIRMED}),
    AppointmentStatus.NO_SHOW: frozenset(
        {AppointmentStatus.CONFIRMED, AppointmentStatus.COMPLETED}
    ),
}


def parse_status(value: "str | AppointmentStatus") -> AppointmentStatus:
    """Convert user input into an AppointmentStatus.

    Raises:
        ValidationError: If the value is not a known status
    """
    if isinstance(value, AppointmentStatus):
        return value
    normalized = value.strip().lower().replace("-", "_")
    try:
        return AppointmentStatus(normalized)
    except ValueError:
        raise ValidationError(invalid_status(value))


def can_transition(old: AppointmentStatus, new: AppointmentStatus) -> bool:
    """Return True if an appointment may move from old to new.

    Re-applying the current status is always allowed.
    """
    if old == new:
        return True
    return new in ALLOWED_TRANSITIONS[old]


def reward_eligible(
    old: AppointmentStatus, new: AppointmentStatus, reward_processed: bool
) -> bool:
    """Whether this status change should issue the service's coin reward."""
    return (
        new == AppointmentStatus.COMPLETED
        and old != AppointmentStatus.COMPLETED
        and not reward_processed
    )
