"""Output models for a scoring call.

The plan decides the shape: FreeAssessment and PremiumAssessment share a
base, and premium-only fields exist only on the premium variant.
"""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, Field


class Plan(str, Enum):
    FREE = "FREE"
    PREMIUM = "PREMIUM"


class RiskLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]


_SEVERITY = {
    RiskLevel.LOW: 0,
    RiskLevel.MEDIUM: 1,
    RiskLevel.HIGH: 2,
    RiskLevel.CRITICAL: 3,
}

FactorScore = Annotated[int, Field(ge=0, le=100)]


class FactorBreakdown(BaseModel):
    """All ten factor scores (0 = safe, 100 = maximum risk)."""

    supply_dilution: FactorScore
    holder_concentration: FactorScore
    liquidity_depth: FactorScore
    vesting_unlock: FactorScore
    contract_control: FactorScore
    tax_fee: FactorScore
    distribution: FactorScore
    burn_deflation: FactorScore
    adoption: FactorScore
    audit_transparency: FactorScore

    model_config = {"frozen": True}


class UpcomingRisks(BaseModel):
    next_30_days: float  # fraction of supply unlocking
    forecast: Literal["LOW", "MEDIUM", "HIGH", "EXTREME"]


class FactorContribution(BaseModel):
    factor: str
    score: int
    weight: float
    contribution: float


class ClassificationSummary(BaseModel):
    classification: Literal["MEME_TOKEN", "UTILITY_TOKEN"]
    confidence: int
    reasoning: str
    meme_baseline_applied: bool
    is_manual_override: bool
    weight_profile: str
    weighting_rationale: str


class AdoptionSummary(BaseModel):
    handle: str | None
    followers: int | None
    tweets_24h: int | None
    engagement_rate: float | None
    adoption_score: int
    level: RiskLevel
    message: str


class AssessmentBase(BaseModel):
    overall_risk_score: int = Field(ge=0, le=100)
    risk_level: RiskLevel
    confidence_score: int
    breakdown: FactorBreakdown
    data_sources: list[str]
    security_status: Literal["active", "fallback"]


class FreeAssessment(AssessmentBase):
    plan: Literal[Plan.FREE] = Plan.FREE
    upgrade_message: str | None = None


class PremiumAssessment(AssessmentBase):
    plan: Literal[Plan.PREMIUM] = Plan.PREMIUM
    critical_flags: list[str]
    upcoming_risks: UpcomingRisks
    detailed_insights: list[str]
    weight_profile: str
    factor_contributions: list[FactorContribution]
    classification: ClassificationSummary | None = None
    adoption: AdoptionSummary | None = None


RiskAssessment = Annotated[FreeAssessment | PremiumAssessment, Field(discriminator="plan")]
