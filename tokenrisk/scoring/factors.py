"""Ten factor scorers. Each maps TokenMetrics to a 0-100 risk sub-score.

Penalties are additive and tiered, capped at 100. Missing inputs get an
explicit pessimistic default instead of scoring as zero risk.

Scorers that read security-provider fields take has_security_data as an
argument; the engine computes it once per call.
"""

from loguru import logger

from tokenrisk.models.assessment import FactorBreakdown
from tokenrisk.models.token import SecuritySignals, TokenMetrics

LARGE_CAP_OVERRIDE_USD = 50_000_000_000

# Fallback scores for missing inputs
NO_LIQUIDITY_SCORE = 85
UNKNOWN_HOLDERS_SCORE = 65
UNKNOWN_DISTRIBUTION_SCORE = 60
UNKNOWN_VESTING_SCORE = 25
NO_SECURITY_TAX_SCORE = 50
NO_SUPPLY_BURN_SCORE = 50


def _clamp(score: int) -> int:
    return max(0, min(score, 100))


def _security(metrics: TokenMetrics) -> SecuritySignals:
    return metrics.security or SecuritySignals()


def score_supply_dilution(metrics: TokenMetrics) -> int:
    """Inflation risk from locked supply and uncapped issuance."""
    score = 0

    # --- Market cap vs FDV (0-38 pts) ---
    if metrics.fdv > 0 and metrics.market_cap > 0:
        mc_fdv = metrics.market_cap / metrics.fdv
        if mc_fdv < 0.02:
            score += 38
        elif mc_fdv < 0.05:
            score += 32
        elif mc_fdv < 0.10:
            score += 27
        elif mc_fdv < 0.15:
            score += 22
        elif mc_fdv < 0.25:
            score += 17
        elif mc_fdv < 0.35:
            score += 12
        elif mc_fdv < 0.50:
            score += 7
    else:
        score += 15

    # --- Circulating vs total supply (0-32 pts) ---
    if metrics.total_supply > 0:
        circ = metrics.circulating_supply / metrics.total_supply
        if circ < 0.05:
            score += 32
        elif circ < 0.10:
            score += 26
        elif circ < 0.20:
            score += 21
        elif circ < 0.30:
            score += 16
        elif circ < 0.40:
            score += 11
        elif circ < 0.50:
            score += 6
    else:
        score += 10

    # --- Uncapped supply ---
    if not metrics.max_supply:
        score += 22 if metrics.burned_supply <= 0 else 10

    return _clamp(score)


def score_holder_concentration(metrics: TokenMetrics) -> int:
    """Whale risk from top-10 share plus absolute holder count."""
    if not metrics.top10_known:
        return UNKNOWN_HOLDERS_SCORE

    score = 0
    top10 = metrics.top10_holders_pct or 0.0

    # --- Top 10 share (0-50 pts) ---
    if top10 > 0.8:
        score += 50
    elif top10 > 0.7:
        score += 40
    elif top10 > 0.6:
        score += 35
    elif top10 > 0.5:
        score += 28
    elif top10 > 0.4:
        score += 20
    elif top10 > 0.3:
        score += 12
    elif top10 > 0.2:
        score += 5

    # --- Holder count (0-40 pts) ---
    holders = metrics.holder_count
    if holders <= 0:
        score += 40
    elif holders < 50:
        score += 35
    elif holders < 100:
        score += 30
    elif holders < 200:
        score += 25
    elif holders < 500:
        score += 18
    elif holders < 1000:
        score += 10
    elif holders < 5000:
        score += 5

    return _clamp(score)


def score_liquidity_depth(metrics: TokenMetrics, has_security_data: bool) -> int:
    liquidity = metrics.liquidity_usd
    if not liquidity or liquidity <= 0:
        return NO_LIQUIDITY_SCORE

    score = 0

    # --- Absolute liquidity (0-50 pts) ---
    if liquidity < 1_000:
        score += 50
    elif liquidity < 5_000:
        score += 42
    elif liquidity < 10_000:
        score += 36
    elif liquidity < 25_000:
        score += 28
    elif liquidity < 50_000:
        score += 22
    elif liquidity < 100_000:
        score += 15
    elif liquidity < 250_000:
        score += 8
    elif liquidity < 500_000:
        score += 3

    # --- MCap / liquidity (0-38 pts) ---
    if metrics.market_cap > 0:
        ratio = metrics.market_cap / liquidity
        if ratio > 500:
            score += 38
        elif ratio > 300:
            score += 32
        elif ratio > 200:
            score += 28
        elif ratio > 100:
            score += 22
        elif ratio > 50:
            score += 15
        elif ratio > 20:
            score += 8

    if has_security_data:
        score += -5 if _security(metrics).lp_locked else 20

    return _clamp(score)


def score_vesting_unlock(metrics: TokenMetrics) -> int:
    """Upcoming sell pressure from unlocks and short team vesting."""
    unlock = metrics.next_unlock_30d_pct
    vesting = metrics.team_vesting_months
    if unlock is None and vesting is None:
        return UNKNOWN_VESTING_SCORE

    score = 0
    if unlock:
        if unlock > 0.25:
            score += 30
        elif unlock > 0.15:
            score += 20
        elif unlock > 0.10:
            score += 15
        elif unlock > 0.05:
            score += 10

    if vesting is not None:
        if vesting == 0 and (metrics.team_allocation_pct or 0) > 0.1:
            score += 40
        elif vesting < 12:
            score += 25
        elif vesting < 24:
            score += 15

    return _clamp(score)


def score_contract_control(
    metrics: TokenMetrics,
    has_security_data: bool,
    *,
    large_cap_override_usd: float = LARGE_CAP_OVERRIDE_USD,
) -> int:
    """Owner/mint control risk.

    With security data: honeypot is always 100, then large caps are 0
    (battle-tested proxies like USDT/USDC), then renounced + non-mintable is 0.
    Without it, concentration, holder count and age stand in as proxies.
    """
    if has_security_data:
        sec = _security(metrics)
        if sec.is_honeypot:
            return 100

        if metrics.market_cap > large_cap_override_usd:
            logger.debug(
                f"[FACTORS] Large cap override: ${metrics.market_cap / 1e9:.1f}B "
                f"> ${large_cap_override_usd / 1e9:.1f}B"
            )
            return 0

        if sec.owner_renounced and not sec.is_mintable:
            return 0

        score = 0
        if sec.is_mintable and not sec.owner_renounced:
            score += 60
        if not sec.owner_renounced and not sec.is_mintable:
            score += 30
        return _clamp(score)

    score = 20  # unverified contract
    if (metrics.top10_holders_pct or 0) > 0.8:
        score += 35
    if metrics.holder_count < 100:
        score += 25
    if metrics.age_days < 7:
        score += 20
    return _clamp(score)


def score_tax_fee(metrics: TokenMetrics, has_security_data: bool) -> int:
    if not has_security_data:
        return NO_SECURITY_TAX_SCORE

    sec = _security(metrics)
    score = 0
    sell_tax = sec.sell_tax or 0.0
    if sell_tax > 0.3:
        score += 60
    elif sell_tax > 0.2:
        score += 40
    elif sell_tax > 0.1:
        score += 20

    if (sec.buy_tax or 0.0) > 0.15:
        score += 20
    if sec.tax_modifiable:
        score += 30
    return _clamp(score)


def score_distribution(metrics: TokenMetrics) -> int:
    """Team allocation and top-holder spread.

    The top-10 placeholder is a fabricated number, so it scores as unknown.
    """
    if not metrics.top10_known:
        return UNKNOWN_DISTRIBUTION_SCORE

    score = 0
    team = metrics.team_allocation_pct or 0.0
    if team > 0.4:
        score += 35
    elif team > 0.3:
        score += 25
    elif team > 0.2:
        score += 15

    top10 = metrics.top10_holders_pct or 0.0
    if top10 > 0.6:
        score += 30
    elif top10 > 0.5:
        score += 20
    return _clamp(score)


def score_burn_deflation(metrics: TokenMetrics) -> int:
    if metrics.total_supply <= 0:
        return NO_SUPPLY_BURN_SCORE

    capped = bool(metrics.max_supply and metrics.max_supply > 0)
    burned = metrics.burned_supply or 0.0
    if not capped and burned <= 0:
        return 80

    burn_ratio = burned / metrics.total_supply
    if burn_ratio > 0.5:
        return 10
    if burn_ratio > 0.2:
        return 30
    if burn_ratio > 0.05:
        return 50
    if capped:
        return 40
    return 70


def score_adoption(metrics: TokenMetrics) -> int:
    """On-chain usage: tx count, volume/mcap, age.

    Replaced by the social-derived score when social data is available.
    """
    score = 0

    # --- 24h transactions (0-45 pts) ---
    tx = metrics.tx_count_24h
    if tx <= 0:
        score += 45
    elif tx < 5:
        score += 38
    elif tx < 10:
        score += 32
    elif tx < 25:
        score += 26
    elif tx < 50:
        score += 20
    elif tx < 100:
        score += 14
    elif tx < 250:
        score += 8
    elif tx < 500:
        score += 3

    # --- Volume / market cap (0-32 pts): dead and wash-traded are both risky ---
    if metrics.market_cap > 0 and metrics.volume_24h >= 0:
        ratio = metrics.volume_24h / metrics.market_cap
        if ratio < 0.0001:
            score += 32
        elif ratio < 0.001:
            score += 26
        elif ratio < 0.005:
            score += 20
        elif ratio < 0.01:
            score += 14
        elif ratio > 5:
            score += 25
        elif ratio > 3:
            score += 18
        elif ratio > 2:
            score += 12

    # --- Age (0-22 pts) ---
    age = metrics.age_days
    if age < 1:
        score += 22
    elif age < 3:
        score += 16
    elif age < 7:
        score += 12
    elif age < 14:
        score += 8
    elif age < 30:
        score += 4

    return _clamp(score)


def score_audit_transparency(metrics: TokenMetrics, has_security_data: bool) -> int:
    if has_security_data:
        sec = _security(metrics)
        score = 0
        if not sec.is_open_source:
            score += 50
        if not sec.lp_locked:
            score += 30
        return _clamp(score)

    score = 60
    liquidity = metrics.liquidity_usd
    if liquidity <= 0 or metrics.market_cap / liquidity > 100:
        score += 20
    return _clamp(score)


def compute_factor_breakdown(
    metrics: TokenMetrics,
    has_security_data: bool,
    *,
    large_cap_override_usd: float = LARGE_CAP_OVERRIDE_USD,
) -> FactorBreakdown:
    """Run all ten scorers against one metrics record."""
    return FactorBreakdown(
        supply_dilution=score_supply_dilution(metrics),
        holder_concentration=score_holder_concentration(metrics),
        liquidity_depth=score_liquidity_depth(metrics, has_security_data),
        vesting_unlock=score_vesting_unlock(metrics),
        contract_control=score_contract_control(
            metrics, has_security_data, large_cap_override_usd=large_cap_override_usd,
        ),
        tax_fee=score_tax_fee(metrics, has_security_data),
        distribution=score_distribution(metrics),
        burn_deflation=score_burn_deflation(metrics),
        adoption=score_adoption(metrics),
        audit_transparency=score_audit_transparency(metrics, has_security_data),
    )
