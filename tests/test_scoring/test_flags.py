"""Tests for critical flags, unlock forecast and insights."""

from tests.factories import make_metrics, make_security
from tokenrisk.models.assessment import FactorBreakdown
from tokenrisk.scoring.flags import extract_critical_flags, forecast_upcoming_risks, generate_insights


def _breakdown(**overrides: int) -> FactorBreakdown:
    scores = dict.fromkeys(FactorBreakdown.model_fields, 0)
    scores.update(overrides)
    return FactorBreakdown(**scores)


class TestCriticalFlags:
    def test_clean_token_has_no_flags(self) -> None:
        metrics = make_metrics(security=make_security())
        assert extract_critical_flags(metrics, True) == []

    def test_security_flags_in_rule_order(self) -> None:
        metrics = make_metrics(
            security=make_security(
                is_honeypot=True,
                is_mintable=True,
                owner_renounced=False,
                tax_modifiable=True,
                sell_tax=0.25,
                lp_locked=False,
            ),
        )
        assert extract_critical_flags(metrics, True) == [
            "HONEYPOT DETECTED - Cannot sell",
            "Owner can mint unlimited tokens",
            "Taxes can be changed anytime",
            "High sell tax: 25%",
            "Liquidity not locked",
        ]

    def test_sell_tax_at_threshold_is_not_flagged(self) -> None:
        metrics = make_metrics(security=make_security(sell_tax=0.2))
        assert extract_critical_flags(metrics, True) == []

    def test_security_rules_skipped_without_data(self) -> None:
        metrics = make_metrics(top10_holders_pct=0.85)
        assert extract_critical_flags(metrics, False) == ["85% held by top 10 wallets"]

    def test_unlock_and_whale_flags(self) -> None:
        metrics = make_metrics(next_unlock_30d_pct=0.225, top10_holders_pct=0.72)
        assert extract_critical_flags(metrics, False) == [
            "22.5% unlocking in 30 days",
            "72% held by top 10 wallets",
        ]


class TestForecast:
    def test_unknown_unlock_is_low(self) -> None:
        upcoming = forecast_upcoming_risks(make_metrics())
        assert upcoming.forecast == "LOW"
        assert upcoming.next_30_days == 0.0

    def test_tiers(self) -> None:
        assert forecast_upcoming_risks(make_metrics(next_unlock_30d_pct=0.05)).forecast == "LOW"
        assert forecast_upcoming_risks(make_metrics(next_unlock_30d_pct=0.08)).forecast == "MEDIUM"
        assert forecast_upcoming_risks(make_metrics(next_unlock_30d_pct=0.2)).forecast == "HIGH"
        upcoming = forecast_upcoming_risks(make_metrics(next_unlock_30d_pct=0.4))
        assert upcoming.forecast == "EXTREME"
        assert upcoming.next_30_days == 0.4


class TestInsights:
    def test_quiet_breakdown(self) -> None:
        assert generate_insights(_breakdown(contract_control=70, liquidity_depth=60), True) == []

    def test_contract_insight_depends_on_security_data(self) -> None:
        breakdown = _breakdown(contract_control=80)
        assert generate_insights(breakdown, True) == [
            "Contract has high risk features (honeypot, mintable, or no renouncement)",
        ]
        assert generate_insights(breakdown, False) == [
            "Contract shows centralization patterns - verification unavailable",
        ]

    def test_all_rules(self) -> None:
        breakdown = _breakdown(
            contract_control=100, liquidity_depth=85, vesting_unlock=70, holder_concentration=90,
        )
        assert len(generate_insights(breakdown, False)) == 4
