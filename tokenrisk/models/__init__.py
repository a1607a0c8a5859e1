from tokenrisk.models.assessment import (
    AdoptionSummary,
    ClassificationSummary,
    FactorBreakdown,
    FactorContribution,
    FreeAssessment,
    Plan,
    PremiumAssessment,
    RiskAssessment,
    RiskLevel,
    UpcomingRisks,
)
from tokenrisk.models.classification import ClassificationResult, ClassificationVerdict, TokenHint
from tokenrisk.models.social import SocialMetrics
from tokenrisk.models.token import (
    UNKNOWN_TOP10_PCT,
    ChainFamily,
    ManualClassification,
    ScoringMetadata,
    SecuritySignals,
    TokenMetrics,
)

__all__ = [
    "AdoptionSummary",
    "ClassificationSummary",
    "FactorBreakdown",
    "FactorContribution",
    "FreeAssessment",
    "Plan",
    "PremiumAssessment",
    "RiskAssessment",
    "RiskLevel",
    "UpcomingRisks",
    "ClassificationResult",
    "ClassificationVerdict",
    "TokenHint",
    "SocialMetrics",
    "UNKNOWN_TOP10_PCT",
    "ChainFamily",
    "ManualClassification",
    "ScoringMetadata",
    "SecuritySignals",
    "TokenMetrics",
]
