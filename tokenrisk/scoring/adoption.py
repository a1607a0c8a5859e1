"""Social adoption risk. Replaces the on-chain adoption score when
social-signal data is available.
"""

from tokenrisk.models.assessment import RiskLevel
from tokenrisk.models.social import SocialMetrics


def score_social_adoption(social: SocialMetrics, holder_count: int) -> int:
    """Compute adoption risk 0-100 (higher = riskier) from social metrics.

    Follower reach (0-40), 24h tweet volume (0-30), engagement per tweet
    (0-20), verification/account age (0-10), then holder/follower mismatch
    adjustments. Sections whose inputs are unknown add nothing.
    """
    score = 0

    # --- Followers (0-40 pts) ---
    followers = social.follower_count
    if followers is not None:
        if followers <= 0:
            score += 40
        elif followers < 500:
            score += 35
        elif followers < 5_000:
            score += 25
        elif followers < 50_000:
            score += 15
        elif followers < 500_000:
            score += 5

    # --- Tweet volume 24h (0-30 pts) ---
    tweets = social.tweet_volume_24h
    if tweets is not None:
        if tweets <= 0:
            score += 30
        elif tweets < 10:
            score += 25
        elif tweets < 50:
            score += 15
        elif tweets < 200:
            score += 5

    # --- Engagement quality (0-20 pts) ---
    engagement = social.engagement
    if engagement is not None:
        if engagement < 1:
            score += 20
        elif engagement < 5:
            score += 10
        elif engagement < 20:
            score += 5

    # --- Verification & account age (0-10 pts) ---
    if social.verified is False and social.account_age_days is not None:
        if social.account_age_days < 90:
            score += 10
        elif social.account_age_days < 365:
            score += 5

    if followers is not None:
        # Big following but almost no holders: bought followers
        if followers > 10_000 and holder_count < 100:
            score += 15

        # Many holders with a small account: organic growth
        if holder_count > 5_000 and followers < 1_000:
            score = max(0, score - 10)

    return min(score, 100)


def adoption_risk_level(score: int) -> tuple[RiskLevel, str]:
    if score < 20:
        return RiskLevel.LOW, "Strong social presence with engaged community"
    if score < 40:
        return RiskLevel.MEDIUM, "Moderate social presence, growing community"
    if score < 70:
        return RiskLevel.HIGH, "Weak social presence, limited community"
    return RiskLevel.CRITICAL, "No social presence - high abandonment risk"
