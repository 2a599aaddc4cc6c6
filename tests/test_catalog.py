"""Tests for the service catalog."""

from decimal import Decimal
import pytest

from washbook.domain.errors import (
    NotFoundError,
    ServiceNotFoundError,
    ValidationError,
    VendorNotFoundError,
)


def test_create_service(catalog_service, sample_vendor):
    """Test creating a service."""
    service_id = catalog_service.create_service(
        vendor_id=sample_vendor.id,
        name="  Wax  ",
        price=Decimal("29.90"),
        duration=30,
        coin_reward=5,
    )

    service = catalog_service.get_service(service_id)
    assert service.name == "Wax"
    assert service.price == Decimal("29.90")
    assert service.available is True
    assert service.coin_reward == 5


@pytest.mark.parametrize(
    "price, duration, coin_reward",
    [(Decimal("-1"), 30, 0), (Decimal("10"), 0, 0), (Decimal("10"), 30, -5)],
)
def test_create_service_validation(catalog_service, sample_vendor, price, duration, coin_reward):
    """Test that negative prices and rewards and empty durations are rejected."""
    with pytest.raises(ValidationError):
        catalog_service.create_service(
            sample_vendor.id, "Bad", price, duration, coin_reward=coin_reward
        )


def test_create_service_free_is_allowed(catalog_service, sample_vendor):
    """Test that a zero price is allowed."""
    service_id = catalog_service.create_service(sample_vendor.id, "Vacuum", Decimal("0"), 10)
    assert catalog_service.get_service(service_id).price == Decimal("0")


def test_create_service_missing_vendor(catalog_service):
    """Test creating a service for a vendor that does not exist."""
    with pytest.raises(VendorNotFoundError):
        catalog_service.create_service(999, "Wash", Decimal("10"), 30)


def test_update_service(catalog_service, sample_service):
    """Test that only given fields change."""
    catalog_service.update_service(sample_service.id, price=Decimal("55.00"), available=False)

    service = catalog_service.get_service(sample_service.id)
    assert service.price == Decimal("55.00")
    assert service.available is False
    assert service.name == "Full wash"
    assert service.coin_reward == 20


def test_update_service_validation(catalog_service, sample_service):
    """Test that updates are validated too."""
    with pytest.raises(ValidationError):
        catalog_service.update_service(sample_service.id, duration=-10)
    with pytest.raises(ServiceNotFoundError):
        catalog_service.update_service(999, name="Ghost")


def test_delete_service(catalog_service, sample_service):
    """Test deleting a service."""
    catalog_service.delete_service(sample_service.id)
    assert catalog_service.get_service(sample_service.id) is None
    with pytest.raises(ServiceNotFoundError):
        catalog_service.delete_service(sample_service.id)


def test_list_vendor_services(catalog_service, vendor_service, sample_vendor, sample_service):
    """Test listing services, hidden for banned or missing vendors."""
    assert [s.id for s in catalog_service.list_vendor_services(sample_vendor.id)] == [sample_service.id]

    vendor_service.set_banned(sample_vendor.id, True)
    assert catalog_service.list_vendor_services(sample_vendor.id) == []
    assert catalog_service.list_vendor_services(999) == []


def test_recommended_services(catalog_service, vendor_service, sample_vendor, sample_service):
    """Test recommendations only include bookable services of verified vendors."""
    hidden_id = catalog_service.create_service(
        sample_vendor.id, "Seasonal", Decimal("10"), 15, available=False
    )
    for i in range(6):
        catalog_service.create_service(sample_vendor.id, f"Extra {i}", Decimal("5"), 10)

    recommended = catalog_service.recommended_services()
    assert len(recommended) == 5
    assert hidden_id not in {s.id for s in recommended}

    vendor_service.set_verified(sample_vendor.id, False)
    assert catalog_service.recommended_services() == []


def test_categories(catalog_service, sample_vendor):
    """Test adding and reordering categories."""
    category_id = catalog_service.create_category(
        sample_vendor.id, "Tyres", description="Tyre hotel", icon="disc", order=0
    )

    categories = catalog_service.list_categories(sample_vendor.id)
    assert categories[0].id == category_id
    assert len(categories) == 5

    catalog_service.update_category(category_id, order=9, name="Tyre service")
    categories = catalog_service.list_categories(sample_vendor.id)
    assert categories[-1].id == category_id
    assert categories[-1].name == "Tyre service"


def test_category_errors(catalog_service, sample_vendor):
    """Test category validation and missing categories."""
    with pytest.raises(ValidationError):
        catalog_service.create_category(sample_vendor.id, " ")
    with pytest.raises(VendorNotFoundError):
        catalog_service.create_category(999, "Tyres")
    with pytest.raises(NotFoundError):
        catalog_service.update_category(999, name="Ghost")
