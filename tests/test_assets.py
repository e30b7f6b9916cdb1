"""
Tests for the asset report and display-name helpers.
"""

from datetime import date
from decimal import Decimal

import pytest

from ledgerlens.ledger import parse_ledger
from ledgerlens.models.audit import AuditEventType, AuditSeverity
from ledgerlens.reports import (
    accumulate_asset_balances,
    build_asset_report,
    categorize_assets,
    common_display_prefix,
    find_baseline,
    format_account_name,
    project_year_end,
    project_year_end_on,
    strip_common_prefix,
)


class TestBalances:
    """Tests for asset balance accumulation."""

    def test_coffee_shop_checking_is_negative(self, coffee_shop_ledger, audit_logger):
        balances = accumulate_asset_balances(parse_ledger(coffee_shop_ledger))
        assert balances == {"joint:assets:checking": Decimal("-15.00")}

        categorized, uncategorized = categorize_assets(balances, audit_logger=audit_logger)
        assert all(assets == [] for assets in categorized.values())
        assert uncategorized == []

    def test_implicit_asset_legs_are_resolved(self, sample_transactions):
        balances = accumulate_asset_balances(sample_transactions)
        assert balances["joint:assets:savings:ally"] == Decimal("15000.00")
        assert balances["joint:assets:brokerage:vanguard"] == Decimal("4000.00")
        assert balances["joint:assets:checking"] == Decimal("-2050.50")

    def test_date_window(self, sample_transactions):
        balances = accumulate_asset_balances(sample_transactions, before=date(2024, 1, 1))
        assert balances == {
            "joint:assets:savings:ally": Decimal("10000.00"),
            "joint:assets:brokerage:vanguard": Decimal("4000.00"),
        }


class TestCategorization:
    """Tests for grouping assets into display categories."""

    def test_sample_categories(self, sample_transactions, audit_logger):
        categorized, uncategorized = categorize_assets(
            accumulate_asset_balances(sample_transactions), audit_logger=audit_logger
        )
        assert list(categorized) == ["Savings", "Investments", "Treasury Bonds", "Possessions"]
        (savings,) = categorized["Savings"]
        assert savings.account_name == "Savings Ally"
        assert savings.full_account_path == "joint:assets:savings:ally"
        assert categorized["Investments"][0].account_name == "Brokerage Vanguard"
        assert uncategorized == []

    def test_largest_first_with_shared_prefix_stripped(self, audit_logger):
        balances = {
            "joint:assets:savings:ally": Decimal("3000"),
            "joint:assets:savings:marcus": Decimal("5000"),
        }
        categorized, _ = categorize_assets(balances, audit_logger=audit_logger)
        assert [a.account_name for a in categorized["Savings"]] == ["Marcus", "Ally"]

    def test_uncategorized_is_logged_not_counted(self, audit_logger, audit_sink):
        balances = {
            "joint:assets:savings:ally": Decimal("3000"),
            "joint:assets:misc:jar": Decimal("50"),
        }
        categorized, uncategorized = categorize_assets(balances, audit_logger=audit_logger)
        assert uncategorized == ["joint:assets:misc:jar"]
        assert sum(len(assets) for assets in categorized.values()) == 1

        (event,) = audit_sink.get_events_by_type(AuditEventType.ASSET_UNCATEGORIZED)
        assert event.severity == AuditSeverity.WARNING
        assert event.entity_name == "joint:assets:misc:jar"
        assert event.details["balance"] == "50"

    def test_very_long_uncategorized_account(self, audit_logger, audit_sink):
        """Test that an extreme account path is reported, not raised."""
        account = "joint:assets:" + "x" * 490
        categorized, uncategorized = categorize_assets({account: Decimal("10")}, audit_logger=audit_logger)
        assert uncategorized == [account]
        (event,) = audit_sink.get_events_by_type(AuditEventType.ASSET_UNCATEGORIZED)
        assert event.entity_name == account
        assert len(event.description) == 500
        assert event.description.endswith("...")

    def test_custom_categories(self, audit_logger):
        balances = {"joint:assets:misc:jar": Decimal("50")}
        categorized, uncategorized = categorize_assets(
            balances, categories={"Cash": ("assets:misc",)}, audit_logger=audit_logger
        )
        assert categorized["Cash"][0].balance == Decimal("50")
        assert uncategorized == []

    @pytest.mark.parametrize("account,expected", [
        ("assets:savings:ally", "Savings Ally"),
        ("assets:bank:chase", "Assets Bank Chase"),
        ("assets:brokerage:vanguard_total", "Brokerage Vanguard Total"),
        ("assets:fixed:io:note", "Fixed Io Note"),
        ("assets:car", "Assets Car"),
    ])
    def test_format_account_name(self, account, expected):
        assert format_account_name(account) == expected


class TestDisplayPrefix:
    """Tests for the shared display-prefix utility."""

    def test_single_name(self):
        assert common_display_prefix(["Savings Ally"]) == ""
        assert strip_common_prefix(["Savings Ally"]) == ["Savings Ally"]

    def test_single_word_names(self):
        assert strip_common_prefix(["Ally", "Marcus"]) == ["Ally", "Marcus"]

    def test_all_identical_names(self):
        assert common_display_prefix(["Savings Ally", "Savings Ally"]) == ""

    def test_prefix_ending_mid_word(self):
        """Test that a prefix is never cut inside a word."""
        assert common_display_prefix(["Bankers Trust", "Bankwest Loan"]) == ""

    def test_prefix_backs_up_to_word_boundary(self):
        assert strip_common_prefix(["US Treasury 2025", "US Treasury 2030"]) == ["2025", "2030"]

    def test_prefix_must_leave_every_name_non_empty(self):
        assert strip_common_prefix(["Home Loan", "Home Loan Extra"]) == ["Loan", "Loan Extra"]
        assert strip_common_prefix(["Savings", "Savings Ally"]) == ["Savings", "Savings Ally"]

    def test_short_prefix_is_kept(self):
        assert strip_common_prefix(["Al One", "Al Two"]) == ["Al One", "Al Two"]

    def test_empty(self):
        assert strip_common_prefix([]) == []


class TestBaselineAndProjection:
    """Tests for year-to-date baseline and year-end projection."""

    def test_projection(self):
        """Test 12000 now, 10000 baseline, 100 days in: 20 a day for 265 more days."""
        assert project_year_end(Decimal("12000"), Decimal("10000"), 100) == Decimal("17300")

    def test_projection_needs_elapsed_days(self):
        assert project_year_end(Decimal("12000"), Decimal("10000"), 0) is None

    def test_projection_on_leap_year_date(self):
        # April 10 2024 is 100 days after January 1 in a 366-day year
        assert project_year_end_on(Decimal("12000"), Decimal("10000"), date(2024, 4, 10)) == Decimal("17320")

    def test_baseline_from_opening_balances(self, sample_transactions, audit_logger, audit_sink):
        baseline, baseline_date = find_baseline(sample_transactions, audit_logger)
        assert baseline == Decimal("14000.00")
        assert baseline_date == date(2023, 12, 20)
        assert audit_sink.get_events_by_type(AuditEventType.BASELINE_FALLBACK) == []

    def test_baseline_fallback(self, audit_logger, audit_sink):
        """Test that without opening balances the prior-year balances are used."""
        transactions = parse_ledger(
            "2023-06-01 Deposit\n    joint:assets:savings:ally  $5,000\n    equity:transfer\n"
            "2024-02-01 Deposit\n    joint:assets:savings:ally  $1,000\n    joint:income:bonus\n"
        )
        baseline, baseline_date = find_baseline(transactions, audit_logger)
        assert baseline == Decimal("5000")
        assert baseline_date == date(2024, 1, 1)
        assert len(audit_sink.get_events_by_type(AuditEventType.BASELINE_FALLBACK)) == 1

    def test_baseline_of_empty_ledger(self, audit_logger):
        assert find_baseline([], audit_logger) == (Decimal("0"), None)

    def test_latest_opening_balances_wins(self, audit_logger):
        transactions = parse_ledger(
            "2023-01-01 Opening balances\n    joint:assets:savings:ally  $1,000\n    equity:opening\n"
            "2023-07-01 Deposit\n    joint:assets:savings:ally  $500\n    equity:transfer\n"
            "2024-01-01 Opening balances\n    joint:assets:savings:ally  $0\n    equity:opening\n"
        )
        baseline, baseline_date = find_baseline(transactions, audit_logger)
        assert baseline_date == date(2024, 1, 1)
        assert baseline == Decimal("1500")

    def test_uncategorized_accounts_stay_out_of_baseline(self, audit_logger):
        """Test that baseline and total cover the same accounts."""
        transactions = parse_ledger(
            "2023-12-31 Opening Balances\n"
            "    joint:assets:checking        $5,000\n"
            "    joint:assets:savings:ally   $10,000\n"
            "    equity:opening\n"
        )
        report = build_asset_report(transactions, as_of=date(2024, 4, 10), audit_logger=audit_logger)
        assert report.total == Decimal("10000")
        assert report.baseline == Decimal("10000")
        assert report.year_to_date_change == 0
        assert report.projected_year_end == Decimal("10000")
        assert report.uncategorized == ["joint:assets:checking"]

    def test_full_report(self, sample_transactions, audit_logger):
        report = build_asset_report(sample_transactions, as_of=date(2024, 4, 10), audit_logger=audit_logger)
        assert report.total == Decimal("19000.00")
        assert report.baseline == Decimal("14000.00")
        assert report.year_to_date_change == Decimal("5000.00")
        # 50 a day over 100 days, 266 days left in 2024
        assert report.projected_year_end == Decimal("32300")
        assert report.uncategorized == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
