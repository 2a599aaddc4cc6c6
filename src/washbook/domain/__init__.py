"""Domain layer for washbook application."""

# Services import the database layer, which imports domain entities, so the
# services are resolved lazily to avoid a circular import.
_SERVICES = {
    "BookingService": "washbook.domain.booking",
    "CatalogService": "washbook.domain.catalog",
    "LedgerService": "washbook.domain.ledger",
    "OfferService": "washbook.domain.offer",
    "ReferralService": "washbook.domain.referral",
    "SupportService": "washbook.domain.support",
    "UserService": "washbook.domain.user",
    "VendorService": "washbook.domain.vendor",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
