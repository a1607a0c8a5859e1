"""Critical flags, unlock forecast and narrative insights (premium output).

Pure rule scan: output order follows rule order, duplicates are allowed.
"""

from tokenrisk.models.assessment import FactorBreakdown, UpcomingRisks
from tokenrisk.models.token import TokenMetrics

HIGH_SELL_TAX = 0.2
LARGE_UNLOCK_PCT = 0.15
WHALE_TOP10_PCT = 0.7


def extract_critical_flags(metrics: TokenMetrics, has_security_data: bool) -> list[str]:
    flags: list[str] = []

    if has_security_data and metrics.security is not None:
        sec = metrics.security
        if sec.is_honeypot:
            flags.append("HONEYPOT DETECTED - Cannot sell")
        if sec.is_mintable and not sec.owner_renounced:
            flags.append("Owner can mint unlimited tokens")
        if sec.tax_modifiable:
            flags.append("Taxes can be changed anytime")
        sell_tax = sec.sell_tax or 0.0
        if sell_tax > HIGH_SELL_TAX:
            flags.append(f"High sell tax: {sell_tax * 100:.0f}%")
        if not sec.lp_locked:
            flags.append("Liquidity not locked")

    unlock = metrics.next_unlock_30d_pct
    if unlock and unlock > LARGE_UNLOCK_PCT:
        flags.append(f"{unlock * 100:.1f}% unlocking in 30 days")

    top10 = metrics.top10_holders_pct
    if top10 is not None and top10 > WHALE_TOP10_PCT:
        flags.append(f"{top10 * 100:.0f}% held by top 10 wallets")

    return flags


def forecast_upcoming_risks(metrics: TokenMetrics) -> UpcomingRisks:
    unlock = metrics.next_unlock_30d_pct or 0.0
    if unlock > 0.3:
        forecast = "EXTREME"
    elif unlock > 0.15:
        forecast = "HIGH"
    elif unlock > 0.05:
        forecast = "MEDIUM"
    else:
        forecast = "LOW"
    return UpcomingRisks(next_30_days=unlock, forecast=forecast)


def generate_insights(breakdown: FactorBreakdown, has_security_data: bool) -> list[str]:
    insights: list[str] = []
    if breakdown.contract_control > 70:
        insights.append(
            "Contract has high risk features (honeypot, mintable, or no renouncement)"
            if has_security_data
            else "Contract shows centralization patterns - verification unavailable"
        )
    if breakdown.liquidity_depth > 60:
        insights.append("Low liquidity creates high slippage risk")
    if breakdown.vesting_unlock > 60:
        insights.append("Major token unlocks expected soon - high sell pressure")
    if breakdown.holder_concentration > 60:
        insights.append("Whale concentration risk - few holders control most supply")
    return insights
