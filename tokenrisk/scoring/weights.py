"""Weight profiles for combining factor scores.

Profile path: 9 factors (vesting excluded), selected by meme classification
and chain family. Legacy path: one fixed 10-factor table, used when no
classification is available.

Every profile goes through normalize_weights() before use, including the
ones whose authored constants already add up to 100%. Most calibration
constants below were authored above 100%; the normalized weights are the
ones that score.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from loguru import logger

from tokenrisk.models.assessment import FactorBreakdown
from tokenrisk.models.token import ChainFamily

NORMALIZATION_TOLERANCE = 0.001  # 0.1%

PROFILE_FACTORS = (
    "supply_dilution",
    "holder_concentration",
    "liquidity_depth",
    "contract_control",
    "tax_fee",
    "distribution",
    "burn_deflation",
    "adoption",
    "audit_transparency",
)


@dataclass(frozen=True)
class WeightProfile:
    name: str
    weights: Mapping[str, float]

    def total(self) -> float:
        return sum(self.weights.values())


def _profile(name: str, **weights: float) -> WeightProfile:
    return WeightProfile(name=name, weights=MappingProxyType(dict(weights)))


# Utility tokens on EVM chains: supply, holders, liquidity (raw sum 108%)
STANDARD_PROFILE = _profile(
    "STANDARD",
    supply_dilution=0.18,
    holder_concentration=0.20,
    liquidity_depth=0.16,
    contract_control=0.15,
    tax_fee=0.11,
    distribution=0.08,
    burn_deflation=0.06,
    adoption=0.10,
    audit_transparency=0.04,
)

# Sentiment-driven tokens: whales, liquidity pulls, social hype (raw sum 104%)
MEME_PROFILE = _profile(
    "MEME",
    supply_dilution=0.14,
    holder_concentration=0.24,
    liquidity_depth=0.20,
    contract_control=0.12,
    tax_fee=0.10,
    distribution=0.06,
    burn_deflation=0.02,
    adoption=0.15,
    audit_transparency=0.01,
)

# Freeze/mint authority dominates; SPL tokens have no transfer tax
SOLANA_PROFILE = _profile(
    "SOLANA",
    supply_dilution=0.12,
    holder_concentration=0.185,
    liquidity_depth=0.167,
    contract_control=0.324,
    tax_fee=0.00,
    distribution=0.056,
    burn_deflation=0.037,
    adoption=0.093,
    audit_transparency=0.019,
)

# Time-locked minting policies make supply policy the key signal (raw sum 115%)
CARDANO_PROFILE = _profile(
    "CARDANO",
    supply_dilution=0.25,
    holder_concentration=0.15,
    liquidity_depth=0.15,
    contract_control=0.20,
    tax_fee=0.00,
    distribution=0.15,
    burn_deflation=0.08,
    adoption=0.10,
    audit_transparency=0.07,
)

# 10-factor table for the legacy path (raw sum 110%)
LEGACY_PROFILE = _profile(
    "LEGACY",
    supply_dilution=0.18,
    holder_concentration=0.16,
    liquidity_depth=0.14,
    vesting_unlock=0.13,
    contract_control=0.12,
    tax_fee=0.10,
    distribution=0.09,
    burn_deflation=0.08,
    adoption=0.07,
    audit_transparency=0.03,
)

CHAIN_PROFILES: Mapping[ChainFamily, WeightProfile] = MappingProxyType({
    ChainFamily.EVM: STANDARD_PROFILE,
    ChainFamily.SOLANA: SOLANA_PROFILE,
    ChainFamily.CARDANO: CARDANO_PROFILE,
})

ALL_PROFILES = (STANDARD_PROFILE, MEME_PROFILE, SOLANA_PROFILE, CARDANO_PROFILE, LEGACY_PROFILE)


def normalize_weights(profile: WeightProfile) -> WeightProfile:
    """Rescale weights by 1/sum when the total is off 1.0 by more than 0.1%."""
    total = profile.total()
    if total <= 0:
        raise ValueError(f"Weight profile {profile.name} has non-positive total {total}")
    if abs(total - 1.0) <= NORMALIZATION_TOLERANCE:
        return profile

    logger.debug(f"[WEIGHTS] Normalizing {profile.name} from {total * 100:.1f}% to 100%")
    return WeightProfile(
        name=profile.name,
        weights=MappingProxyType({key: value / total for key, value in profile.weights.items()}),
    )


def resolve_weights(is_meme: bool, chain_family: ChainFamily = ChainFamily.EVM) -> WeightProfile:
    """Pick the profile for a token and return it normalized.

    Meme tokens use the meme profile on every chain.
    """
    if is_meme:
        base = MEME_PROFILE
    else:
        base = CHAIN_PROFILES.get(chain_family, STANDARD_PROFILE)
    return normalize_weights(base)


def legacy_weights() -> WeightProfile:
    return normalize_weights(LEGACY_PROFILE)


def weighting_rationale(is_meme: bool, chain_family: ChainFamily = ChainFamily.EVM) -> str:
    if is_meme:
        return (
            "Meme token weights: prioritizes whale concentration (23%), liquidity depth (19%) "
            "and social adoption (14%). Meme coins are sentiment-driven and vulnerable to "
            "influencer manipulation."
        )
    if chain_family is ChainFamily.SOLANA:
        return (
            "Solana weights: prioritizes contract control (32.4%) due to freeze/mint "
            "authority risks. SPL token authorities can lock user wallets."
        )
    if chain_family is ChainFamily.CARDANO:
        return (
            "Cardano weights: prioritizes supply policy (22%). Once a minting policy is "
            "locked, supply is fixed forever."
        )
    return (
        "Standard weights: balanced approach prioritizing holder concentration (19%), "
        "supply dilution (17%) and liquidity depth (15%) for utility tokens."
    )


def weighted_score(breakdown: FactorBreakdown, profile: WeightProfile) -> float:
    """Unrounded weighted sum over the factors the profile names."""
    scores = breakdown.model_dump()
    return sum(scores[key] * weight for key, weight in profile.weights.items())


def factor_contributions(
    breakdown: FactorBreakdown, profile: WeightProfile,
) -> list[tuple[str, int, float, float]]:
    """(factor, score, weight, score * weight), highest contribution first."""
    scores = breakdown.model_dump()
    rows = [
        (key, scores[key], weight, scores[key] * weight)
        for key, weight in profile.weights.items()
    ]
    return sorted(rows, key=lambda row: (-row[3], row[0]))
