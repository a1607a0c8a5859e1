"""Token risk scoring pipeline.

metrics + optional side-channel results -> 10 factor scores -> weighted
aggregate -> level / confidence / flags -> plan-shaped assessment.

One branch point: a resolved classification (or manual override) selects a
normalized 9-factor profile; otherwise the legacy 10-factor table is used.
"""

import asyncio
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from loguru import logger

from config.settings import settings
from tokenrisk.models.assessment import (
    AdoptionSummary,
    ClassificationSummary,
    FactorBreakdown,
    FactorContribution,
    FreeAssessment,
    Plan,
    PremiumAssessment,
    RiskLevel,
)
from tokenrisk.models.classification import ClassificationResult
from tokenrisk.models.social import SocialMetrics
from tokenrisk.models.token import ScoringMetadata, TokenMetrics
from tokenrisk.parsers.base import ClassificationService, SocialSignalService
from tokenrisk.scoring.adoption import adoption_risk_level, score_social_adoption
from tokenrisk.scoring.classification import resolve_classification
from tokenrisk.scoring.factors import compute_factor_breakdown
from tokenrisk.scoring.flags import extract_critical_flags, forecast_upcoming_risks, generate_insights
from tokenrisk.scoring.weights import (
    WeightProfile,
    factor_contributions,
    legacy_weights,
    resolve_weights,
    weighted_score,
    weighting_rationale,
)

# (has_security_data, plan) -> confidence
CONFIDENCE_SCORES: dict[tuple[bool, Plan], int] = {
    (True, Plan.PREMIUM): 96,
    (True, Plan.FREE): 85,
    (False, Plan.PREMIUM): 78,
    (False, Plan.FREE): 70,
}

UPGRADE_MESSAGE = "Premium unlocks forecasts, critical flags, and detailed insights"


def classify_risk_level(score: float) -> RiskLevel:
    if score >= 75:
        return RiskLevel.CRITICAL
    if score >= 50:
        return RiskLevel.HIGH
    if score >= 30:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def confidence_score(has_security_data: bool, plan: Plan) -> int:
    return CONFIDENCE_SCORES[(has_security_data, plan)]


def round_score(raw: float) -> int:
    """Round half away from zero and clamp to 0-100."""
    rounded = int(Decimal(str(raw)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return max(0, min(rounded, 100))


@dataclass(frozen=True)
class _Aggregate:
    raw_score: float
    profile: WeightProfile
    meme_baseline_applied: bool


class RiskEngine:
    """Scores tokens. Holds only injected, shareable service handles."""

    def __init__(
        self,
        classifier: ClassificationService | None = None,
        social: SocialSignalService | None = None,
        *,
        meme_baseline: int | None = None,
        large_cap_override_usd: float | None = None,
        upgrade_prompt_threshold: int | None = None,
        classification_timeout: float | None = None,
        social_timeout: float | None = None,
    ) -> None:
        self._classifier = classifier
        self._social = social
        self._meme_baseline = (
            settings.meme_baseline_score if meme_baseline is None else meme_baseline
        )
        self._large_cap_override_usd = (
            settings.large_cap_override_usd
            if large_cap_override_usd is None
            else large_cap_override_usd
        )
        self._upgrade_prompt_threshold = (
            settings.upgrade_prompt_threshold
            if upgrade_prompt_threshold is None
            else upgrade_prompt_threshold
        )
        self._classification_timeout = (
            settings.classification_timeout_sec
            if classification_timeout is None
            else classification_timeout
        )
        self._social_timeout = (
            settings.social_timeout_sec if social_timeout is None else social_timeout
        )

    async def score(
        self,
        metrics: TokenMetrics,
        plan: Plan | str,
        metadata: ScoringMetadata | None = None,
    ) -> FreeAssessment | PremiumAssessment:
        """Score one token. External service failures never propagate."""
        plan = Plan(plan)
        metadata = metadata or ScoringMetadata()
        has_security_data = metrics.has_security_data

        breakdown = compute_factor_breakdown(
            metrics, has_security_data, large_cap_override_usd=self._large_cap_override_usd,
        )

        classification, social = await asyncio.gather(
            resolve_classification(
                self._classifier,
                manual=metadata.manual_classification,
                symbol=metadata.symbol,
                name=metadata.name,
                description=metadata.description,
                timeout=self._classification_timeout,
            ),
            self._fetch_social(metadata),
        )

        if social is not None:
            breakdown = breakdown.model_copy(
                update={"adoption": score_social_adoption(social, metrics.holder_count)},
            )

        logger.debug(
            f"[RISK] Factors (security {'active' if has_security_data else 'fallback'}): "
            f"{breakdown.model_dump()}"
        )

        aggregate = self._aggregate(breakdown, classification, metadata)
        overall = round_score(aggregate.raw_score)
        level = classify_risk_level(overall)

        logger.info(
            f"[RISK] {metadata.symbol or '?'} plan={plan.value} profile={aggregate.profile.name} "
            f"raw={aggregate.raw_score:.2f} score={overall} level={level.value}"
        )

        if has_security_data:
            data_sources = ["Market data", "Security provider"]
        else:
            data_sources = ["Market data (security fallback active)"]
        if classification.resolved and not classification.is_manual_override:
            data_sources.append(f"Classification ({classification.source})")
        if social is not None:
            data_sources.append("Social signals")

        base = {
            "overall_risk_score": overall,
            "risk_level": level,
            "confidence_score": confidence_score(has_security_data, plan),
            "breakdown": breakdown,
            "data_sources": data_sources,
            "security_status": "active" if has_security_data else "fallback",
        }

        if plan is Plan.FREE:
            return FreeAssessment(
                **base,
                upgrade_message=(
                    UPGRADE_MESSAGE if overall > self._upgrade_prompt_threshold else None
                ),
            )

        insights = generate_insights(breakdown, has_security_data)
        classification_summary: ClassificationSummary | None = None
        adoption_summary: AdoptionSummary | None = None

        if classification.resolved:
            classification_summary = ClassificationSummary(
                classification="MEME_TOKEN" if classification.is_meme else "UTILITY_TOKEN",
                confidence=classification.confidence,
                reasoning=classification.reasoning,
                meme_baseline_applied=aggregate.meme_baseline_applied,
                is_manual_override=classification.is_manual_override,
                weight_profile=aggregate.profile.name,
                weighting_rationale=weighting_rationale(
                    classification.is_meme, metadata.chain_family,
                ),
            )
            insights.append(_classification_insight(classification_summary))

            if social is not None:
                adoption_summary = _adoption_summary(social, breakdown.adoption)
                insights.append(_adoption_insight(adoption_summary))

        return PremiumAssessment(
            **base,
            critical_flags=extract_critical_flags(metrics, has_security_data),
            upcoming_risks=forecast_upcoming_risks(metrics),
            detailed_insights=insights,
            weight_profile=aggregate.profile.name,
            factor_contributions=[
                FactorContribution(
                    factor=factor,
                    score=score,
                    weight=round(weight, 4),
                    contribution=round(contribution, 2),
                )
                for factor, score, weight, contribution in factor_contributions(
                    breakdown, aggregate.profile,
                )
            ],
            classification=classification_summary,
            adoption=adoption_summary,
        )

    def _aggregate(
        self,
        breakdown: FactorBreakdown,
        classification: ClassificationResult,
        metadata: ScoringMetadata,
    ) -> _Aggregate:
        if not classification.resolved:
            profile = legacy_weights()
            return _Aggregate(weighted_score(breakdown, profile), profile, False)

        profile = resolve_weights(classification.is_meme, metadata.chain_family)
        raw = weighted_score(breakdown, profile)
        baseline_applied = False
        if classification.is_meme and raw < self._meme_baseline:
            logger.debug(f"[RISK] Meme baseline: {raw:.2f} -> {self._meme_baseline}")
            raw = float(self._meme_baseline)
            baseline_applied = True
        return _Aggregate(raw, profile, baseline_applied)

    async def _fetch_social(self, metadata: ScoringMetadata) -> SocialMetrics | None:
        if self._social is None or not (metadata.symbol or metadata.social_handle):
            return None
        try:
            return await asyncio.wait_for(
                self._social.adoption_signal(metadata.symbol, metadata.social_handle),
                timeout=self._social_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"[RISK] Social signal timed out for {metadata.symbol}")
        except Exception as e:
            logger.warning(f"[RISK] Social signal failed for {metadata.symbol}: {e}")
        return None


def _classification_insight(summary: ClassificationSummary) -> str:
    kind = "Meme token" if summary.classification == "MEME_TOKEN" else "Utility token"
    source = "manual override" if summary.is_manual_override else f"{summary.confidence}% confidence"
    text = f"{kind} ({source}): {summary.reasoning}"
    if summary.meme_baseline_applied:
        text += " - meme risk baseline applied"
    return text


def _adoption_summary(social: SocialMetrics, adoption_score: int) -> AdoptionSummary:
    level, message = adoption_risk_level(adoption_score)
    return AdoptionSummary(
        handle=social.handle,
        followers=social.follower_count,
        tweets_24h=social.tweet_volume_24h,
        engagement_rate=(
            round(social.engagement, 2) if social.engagement is not None else None
        ),
        adoption_score=adoption_score,
        level=level,
        message=message,
    )


def _adoption_insight(summary: AdoptionSummary) -> str:
    details = []
    if summary.followers is not None:
        details.append(f"{summary.followers:,} followers")
    if summary.tweets_24h is not None:
        details.append(f"{summary.tweets_24h} tweets in 24h")
    text = f"Social adoption: {summary.message}"
    if details:
        text += f" ({', '.join(details)})"
    return text
