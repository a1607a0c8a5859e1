"""Input models for a single scoring call.

Shares (top-10 holders, unlocks, team allocation, taxes) are 0-1 fractions,
so 0.65 means 65 %.
"""

from enum import Enum

from pydantic import BaseModel, field_validator

# Upstream market-data fetchers substitute this top-10 share when the holder
# list is unavailable. Scorers treat it as "unknown", not as a measured 50 %.
UNKNOWN_TOP10_PCT = 0.5


class ChainFamily(str, Enum):
    """Chain families with their own weighting profile."""

    EVM = "EVM"
    SOLANA = "SOLANA"
    CARDANO = "CARDANO"

    @classmethod
    def from_hint(cls, hint: "str | ChainFamily | None") -> "ChainFamily":
        """Map a chain name or id ("1", "bsc", "solana", "ada", ...) to a family.

        Anything unrecognised is treated as EVM.
        """
        if isinstance(hint, ChainFamily):
            return hint
        if not hint:
            return cls.EVM
        clean = hint.strip().lower()
        if clean in _SOLANA_HINTS:
            return cls.SOLANA
        if clean in _CARDANO_HINTS:
            return cls.CARDANO
        return cls.EVM


_SOLANA_HINTS = {"solana", "sol", "solana-mainnet"}
_CARDANO_HINTS = {"cardano", "ada", "cardano-mainnet"}


class ManualClassification(str, Enum):
    MEME = "MEME"
    UTILITY = "UTILITY"


class SecuritySignals(BaseModel):
    """Contract-level flags merged in from a security-analysis provider."""

    is_honeypot: bool | None = None
    is_mintable: bool | None = None
    owner_renounced: bool | None = None
    buy_tax: float | None = None  # fraction (0.12 = 12%)
    sell_tax: float | None = None  # fraction
    tax_modifiable: bool | None = None
    is_open_source: bool | None = None
    lp_locked: bool | None = None

    model_config = {"frozen": True}

    def is_present(self) -> bool:
        """True when at least one field was filled by the provider."""
        return any(value is not None for value in self.model_dump().values())


class TokenMetrics(BaseModel):
    """Market and on-chain metrics for one token, assembled by the caller."""

    market_cap: float = 0.0
    fdv: float = 0.0
    liquidity_usd: float = 0.0
    total_supply: float = 0.0
    circulating_supply: float = 0.0
    max_supply: float | None = None  # None = uncapped
    burned_supply: float = 0.0
    holder_count: int = 0
    top10_holders_pct: float | None = None
    volume_24h: float = 0.0
    tx_count_24h: int = 0
    age_days: float = 0.0

    # Vesting data (often unavailable)
    next_unlock_30d_pct: float | None = None
    team_vesting_months: int | None = None
    team_allocation_pct: float | None = None

    security: SecuritySignals | None = None

    model_config = {"frozen": True}

    @property
    def has_security_data(self) -> bool:
        return self.security is not None and self.security.is_present()

    @property
    def top10_known(self) -> bool:
        return (
            self.top10_holders_pct is not None
            and self.top10_holders_pct != UNKNOWN_TOP10_PCT
        )


class ScoringMetadata(BaseModel):
    """Optional token metadata used for classification and social lookups."""

    symbol: str | None = None
    name: str | None = None
    description: str | None = None
    social_handle: str | None = None
    chain_family: ChainFamily = ChainFamily.EVM
    manual_classification: ManualClassification | None = None

    model_config = {"frozen": True}

    @field_validator("chain_family", mode="before")
    @classmethod
    def _coerce_chain_family(cls, value: object) -> ChainFamily:
        if value is None or isinstance(value, (str, ChainFamily)):
            return ChainFamily.from_hint(value)
        raise ValueError(f"unsupported chain family: {value!r}")
