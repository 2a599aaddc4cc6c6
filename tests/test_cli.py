"""Tests for the washbook command line interface."""

import pytest
from washbook.cli.main import cli


def run(cli_runner, temp_db, *args, input=None):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], input=input)


def fresh_user(temp_db, user_id):
    """Re-read a user after the CLI wrote through its own connection."""
    temp_db.disconnect()
    return temp_db.get_user(user_id)


def test_help_does_not_need_database(cli_runner):
    """Test that help works without touching a database."""
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "appointment" in result.output
    assert "coins" in result.output


class TestUserCommands:
    """Tests for user commands."""

    def test_create_customer(self, cli_runner, temp_db):
        """Test creating a customer shows the welcome coins."""
        result = run(cli_runner, temp_db, "user", "create", "anna@example.com", "Anna", "Virtanen")

        assert result.exit_code == 0
        assert "Created customer 'Anna Virtanen'" in result.output
        assert "Referral code:" in result.output
        assert "Coins: 10" in result.output

    def test_create_duplicate(self, cli_runner, temp_db, sample_customer):
        """Test that a duplicate email fails."""
        result = run(cli_runner, temp_db, "user", "create", sample_customer.email, "Other", "Person")

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "already exists" in result.output

    def test_list_and_show(self, cli_runner, temp_db, sample_customer):
        """Test listing and showing users."""
        result = run(cli_runner, temp_db, "user", "list")
        assert result.exit_code == 0
        assert "anna@example.com" in result.output

        result = run(cli_runner, temp_db, "user", "show", str(sample_customer.id))
        assert result.exit_code == 0
        assert sample_customer.referral_code in result.output

    def test_list_empty(self, cli_runner, temp_db):
        """Test listing users when none exist."""
        result = run(cli_runner, temp_db, "user", "list")
        assert result.exit_code == 0
        assert "No users found" in result.output

    def test_show_missing(self, cli_runner, temp_db):
        """Test showing a user that does not exist."""
        result = run(cli_runner, temp_db, "user", "show", "999")
        assert result.exit_code == 1
        assert "User 999 not found" in result.output


class TestVendorCommands:
    """Tests for vendor and service commands."""

    def test_create_vendor_and_service(self, cli_runner, temp_db, sample_owner):
        """Test onboarding a vendor from the command line."""
        result = run(
            cli_runner, temp_db, "vendor", "create", str(sample_owner.id), "Bubble Bay",
            "--business-id", "7654321-0", "--address", "Tapiontori 3",
            "--postal-code", "02100", "--city", "Espoo", "--phone", "0401231234",
        )
        assert result.exit_code == 0
        assert "Created vendor 'Bubble Bay'" in result.output

        result = run(cli_runner, temp_db, "vendor", "verify", "Bubble Bay")
        assert result.exit_code == 0

        result = run(
            cli_runner, temp_db, "service", "create", "Bubble Bay", "Foam wash",
            "--price", "24,90", "--duration", "30", "--coin-reward", "5",
        )
        assert result.exit_code == 0
        assert "Created service 'Foam wash'" in result.output

        result = run(cli_runner, temp_db, "service", "list", "Bubble Bay")
        assert "Foam wash" in result.output
        assert "24.90" in result.output

        result = run(cli_runner, temp_db, "vendor", "search", "foam", "--city", "espoo")
        assert result.exit_code == 0
        assert "Bubble Bay" in result.output

        result = run(cli_runner, temp_db, "service", "categories", "Bubble Bay")
        assert "Basic wash" in result.output

    def test_unknown_vendor(self, cli_runner, temp_db):
        """Test resolving a vendor that does not exist."""
        result = run(cli_runner, temp_db, "service", "list", "Nowhere Wash")
        assert result.exit_code == 1
        assert "Error: Vendor 'Nowhere Wash' not found" in result.output

    def test_ban_and_delete(self, cli_runner, temp_db, sample_vendor):
        """Test banning and deleting a vendor."""
        result = run(cli_runner, temp_db, "vendor", "ban", str(sample_vendor.id))
        assert result.exit_code == 0
        assert "banned" in result.output

        result = run(cli_runner, temp_db, "vendor", "delete", str(sample_vendor.id), input="n\n")
        assert "Deletion cancelled" in result.output

        result = run(cli_runner, temp_db, "vendor", "delete", str(sample_vendor.id), "--yes")
        assert result.exit_code == 0
        assert "Deleted vendor 'Shiny Wash'" in result.output


class TestAppointmentCommands:
    """Tests for booking and completing appointments."""

    def book(self, cli_runner, temp_db, vendor, service, customer, *extra):
        return run(
            cli_runner, temp_db, "appointment", "book", str(vendor.id), str(service.id),
            str(customer.id), "--date", "2030-05-01", "--time", "10:00", *extra,
        )

    def test_book_with_coins_then_complete(
        self, cli_runner, temp_db, sample_vendor, sample_service, sample_customer
    ):
        """Test redeeming coins and earning the reward through the CLI."""
        result = self.book(cli_runner, temp_db, sample_vendor, sample_service, sample_customer, "--coins", "10")
        assert result.exit_code == 0
        assert "Booked appointment 1 on 2030-05-01 10:00" in result.output
        assert "Redeemed 10 coins" in result.output

        result = run(cli_runner, temp_db, "coins", "balance", str(sample_customer.id))
        assert "has 0 coins" in result.output

        result = run(cli_runner, temp_db, "appointment", "status", "1", "completed", "--yes")
        assert result.exit_code == 0
        assert "now completed" in result.output
        assert "Credited 20 coins" in result.output

        assert fresh_user(temp_db, sample_customer.id).wallet.coins == 20

        result = run(cli_runner, temp_db, "coins", "history", str(sample_customer.id))
        assert "Coins used for discount" in result.output
        assert "Coins from service: Full wash" in result.output

    def test_complete_asks_for_confirmation(
        self, cli_runner, temp_db, sample_vendor, sample_service, sample_customer
    ):
        """Test that completing without --yes asks first."""
        self.book(cli_runner, temp_db, sample_vendor, sample_service, sample_customer)

        result = run(cli_runner, temp_db, "appointment", "status", "1", "completed", input="n\n")
        assert "credit 20 coins" in result.output
        assert "Status change cancelled" in result.output
        assert fresh_user(temp_db, sample_customer.id).wallet.coins == 10

        result = run(cli_runner, temp_db, "appointment", "status", "1", "completed", input="y\n")
        assert result.exit_code == 0
        assert fresh_user(temp_db, sample_customer.id).wallet.coins == 30

    def test_insufficient_coins(self, cli_runner, temp_db, sample_vendor, sample_service, sample_customer):
        """Test that booking with too many coins fails."""
        result = self.book(cli_runner, temp_db, sample_vendor, sample_service, sample_customer, "--coins", "50")

        assert result.exit_code == 1
        assert "Not enough coins" in result.output

    def test_strict_transition(self, cli_runner, temp_db, sample_vendor, sample_service, sample_customer):
        """Test that --strict rejects changes outside the normal lifecycle."""
        self.book(cli_runner, temp_db, sample_vendor, sample_service, sample_customer)
        run(cli_runner, temp_db, "appointment", "status", "1", "cancelled", "--reason", "Rain")

        result = run(cli_runner, temp_db, "appointment", "status", "1", "completed", "--yes", "--strict")
        assert result.exit_code == 1
        assert "cannot move from 'cancelled' to 'completed'" in result.output

        result = run(cli_runner, temp_db, "appointment", "status", "1", "completed", "--yes")
        assert result.exit_code == 0
        assert fresh_user(temp_db, sample_customer.id).wallet.coins == 30

    def test_list_show_and_feedback(self, cli_runner, temp_db, sample_vendor, sample_service, sample_customer):
        """Test listing, showing and rating appointments."""
        self.book(cli_runner, temp_db, sample_vendor, sample_service, sample_customer, "--license-plate", "XYZ-987")

        result = run(cli_runner, temp_db, "appointment", "list", "--customer", str(sample_customer.id))
        assert "2030-05-01 10:00" in result.output
        assert "confirmed" in result.output

        result = run(cli_runner, temp_db, "appointment", "show", "1")
        assert "XYZ-987" in result.output

        result = run(cli_runner, temp_db, "appointment", "feedback", "1", "5", "--comment", "Spotless")
        assert result.exit_code == 0

        result = run(cli_runner, temp_db, "vendor", "list")
        assert "Rating: 5.0 (1)" in result.output

    def test_list_needs_one_filter(self, cli_runner, temp_db):
        """Test that list requires exactly one of --customer or --vendor."""
        result = run(cli_runner, temp_db, "appointment", "list")
        assert result.exit_code == 1


class TestCoinAndReferralCommands:
    """Tests for coin adjustments and referrals."""

    def test_adjust(self, cli_runner, temp_db, sample_customer):
        """Test manual coin adjustments."""
        result = run(
            cli_runner, temp_db, "coins", "adjust", str(sample_customer.id),
            "--amount=-4", "--description", "Correction",
        )
        assert result.exit_code == 0
        assert "balance is now 6" in result.output

        result = run(
            cli_runner, temp_db, "coins", "adjust", str(sample_customer.id),
            "--amount=-40", "--description", "Too much",
        )
        assert result.exit_code == 1
        assert "Not enough coins" in result.output

    def test_referral(self, cli_runner, temp_db, user_service, sample_customer):
        """Test redeeming a referral code."""
        friend_id = user_service.create_user(email="ville@example.com", first_name="Ville", last_name="Koski")

        result = run(cli_runner, temp_db, "referral", "apply", str(friend_id), sample_customer.referral_code)
        assert result.exit_code == 0
        assert "received 15 coins" in result.output

        result = run(cli_runner, temp_db, "referral", "apply", str(sample_customer.id), sample_customer.referral_code)
        assert result.exit_code == 1
        assert "own referral code" in result.output


class TestSupportCommands:
    """Tests for support ticket commands."""

    def test_ticket_lifecycle(self, cli_runner, temp_db, sample_customer, sample_owner):
        """Test opening, answering and closing a ticket."""
        result = run(cli_runner, temp_db, "support", "create", str(sample_customer.id), "Coins", "Where are my coins?")
        assert result.exit_code == 0
        assert "Opened support ticket 1" in result.output

        result = run(cli_runner, temp_db, "support", "respond", "1", str(sample_owner.id), "Sorted now")
        assert result.exit_code == 0

        result = run(cli_runner, temp_db, "support", "list", "--status", "open")
        assert "Coins" in result.output

        result = run(cli_runner, temp_db, "support", "close", "1")
        assert result.exit_code == 0

        result = run(cli_runner, temp_db, "support", "show", "1")
        assert "closed" in result.output
        assert "Sorted now" in result.output

        result = run(cli_runner, temp_db, "support", "respond", "1", str(sample_owner.id), "Again")
        assert result.exit_code == 1


class TestOfferCommands:
    """Tests for offer commands."""

    def test_create_list_and_update(self, cli_runner, temp_db, sample_vendor, sample_service):
        """Test managing an offer through the CLI."""
        result = run(
            cli_runner, temp_db, "offer", "create", "Shiny Wash", "Summer deal",
            "--description", "Full wash -20%", "--start", "2030-06-01", "--end", "2030-06-30",
            "--service", str(sample_service.id), "--discount", "20", "--price", "40,00",
        )
        assert result.exit_code == 0
        assert "Created offer 'Summer deal' (ID: 1)" in result.output

        result = run(cli_runner, temp_db, "offer", "list", str(sample_vendor.id))
        assert result.exit_code == 0
        assert "2030-06-01 - 2030-06-30" in result.output
        assert "20%" in result.output

        result = run(cli_runner, temp_db, "offer", "update", "1", "--inactive", "--discount", "25")
        assert result.exit_code == 0

        temp_db.disconnect()
        offer = temp_db.get_offer(1)
        assert offer.active is False
        assert offer.discount_percentage == 25
        assert offer.end_date.hour == 23

    def test_invalid_range(self, cli_runner, temp_db, sample_vendor):
        """Test that a reversed date range is reported as an error."""
        result = run(
            cli_runner, temp_db, "offer", "create", "Shiny Wash", "Backwards",
            "--description", "Oops", "--start", "2030-06-30", "--end", "2030-06-01",
        )
        assert result.exit_code == 1
        assert "Error: Offer cannot end before it starts" in result.output

    def test_list_empty(self, cli_runner, temp_db, sample_vendor):
        """Test listing a vendor without offers."""
        result = run(cli_runner, temp_db, "offer", "list", "Shiny Wash")
        assert result.exit_code == 0
        assert "No offers found" in result.output
