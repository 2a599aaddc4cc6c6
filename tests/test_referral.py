"""Tests for referral code redemption."""

import pytest

from washbook.domain.errors import (
    InvalidReferralCodeError,
    ReferralAlreadyUsedError,
    SelfReferralNotAllowedError,
    UserNotFoundError,
)
from washbook.domain.referral import REFERRED_BONUS, REFERRER_BONUS


@pytest.fixture
def referrer(user_service):
    """A second customer whose code gets redeemed."""
    user_id = user_service.create_user(email="ville@example.com", first_name="Ville", last_name="Koski")
    return user_service.get_user(user_id)


def test_apply_referral_code_rewards_both(referral_service, user_service, ledger_service, sample_customer, referrer):
    """Test that both users are credited and the code is recorded."""
    assert referral_service.apply_referral_code(sample_customer.id, referrer.referral_code) is True

    customer = user_service.get_user(sample_customer.id)
    owner = user_service.get_user(referrer.id)
    assert customer.wallet.coins == 10 + REFERRED_BONUS
    assert owner.wallet.coins == 10 + REFERRER_BONUS
    assert customer.used_referral_code == referrer.referral_code
    assert owner.referral_count == 1
    assert customer.wallet.transactions[-1].description == "Referral code bonus"
    assert owner.wallet.transactions[-1].description == "Referral reward"
    assert ledger_service.verify_wallet(customer.id)
    assert ledger_service.verify_wallet(owner.id)


def test_code_is_stripped(referral_service, user_service, sample_customer, referrer):
    """Test that surrounding whitespace is ignored."""
    referral_service.apply_referral_code(sample_customer.id, f"  {referrer.referral_code} ")
    assert user_service.get_user(sample_customer.id).used_referral_code == referrer.referral_code


def test_self_referral_rejected(referral_service, ledger_service, sample_customer):
    """Test that users cannot redeem their own code."""
    with pytest.raises(SelfReferralNotAllowedError):
        referral_service.apply_referral_code(sample_customer.id, sample_customer.referral_code)

    assert len(ledger_service.list_transactions(sample_customer.id)) == 1


def test_unknown_code_rejected(referral_service, sample_customer):
    """Test redeeming a code nobody owns."""
    with pytest.raises(InvalidReferralCodeError, match="nope"):
        referral_service.apply_referral_code(sample_customer.id, "nope")


def test_second_redemption_rejected(referral_service, user_service, sample_customer, referrer):
    """Test that each user redeems at most one code."""
    third_id = user_service.create_user(email="liisa@example.com", first_name="Liisa", last_name="Mäki")
    third = user_service.get_user(third_id)
    referral_service.apply_referral_code(sample_customer.id, referrer.referral_code)

    with pytest.raises(ReferralAlreadyUsedError):
        referral_service.apply_referral_code(sample_customer.id, third.referral_code)

    assert user_service.get_user(third_id).wallet.coins == 10
    assert user_service.get_user(sample_customer.id).wallet.coins == 10 + REFERRED_BONUS


def test_missing_user_changes_nothing(referral_service, user_service, referrer):
    """Test redeeming for a user that does not exist."""
    with pytest.raises(UserNotFoundError):
        referral_service.apply_referral_code(999, referrer.referral_code)

    owner = user_service.get_user(referrer.id)
    assert owner.wallet.coins == 10
    assert owner.referral_count == 0
