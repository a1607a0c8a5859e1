"""Tests for social adoption scoring."""

from tokenrisk.models.assessment import RiskLevel
from tokenrisk.models.social import SocialMetrics
from tokenrisk.scoring.adoption import adoption_risk_level, score_social_adoption


def test_no_social_presence() -> None:
    social = SocialMetrics(
        follower_count=0, tweet_volume_24h=0, engagement=0.0, verified=False, account_age_days=0,
    )
    assert score_social_adoption(social, holder_count=50) == 100  # 40 + 30 + 20 + 10


def test_strong_verified_community() -> None:
    social = SocialMetrics(
        handle="uniswap",
        follower_count=1_200_000,
        tweet_volume_24h=400,
        engagement=35.0,
        verified=True,
        account_age_days=2_000,
    )
    assert score_social_adoption(social, holder_count=300_000) == 0


def test_mid_sized_project() -> None:
    social = SocialMetrics(
        follower_count=20_000,
        tweet_volume_24h=30,
        engagement=3.0,
        verified=False,
        account_age_days=200,
    )
    assert score_social_adoption(social, holder_count=2_000) == 15 + 15 + 10 + 5


def test_bought_followers_penalty() -> None:
    social = SocialMetrics(
        follower_count=20_000, tweet_volume_24h=300, engagement=50, verified=True,
    )
    assert score_social_adoption(social, holder_count=40) == 15 + 15


def test_organic_growth_discount() -> None:
    social = SocialMetrics(
        follower_count=800, tweet_volume_24h=500, engagement=25, verified=True,
    )
    assert score_social_adoption(social, holder_count=10_000) == 25 - 10


def test_risk_levels() -> None:
    assert adoption_risk_level(0)[0] is RiskLevel.LOW
    assert adoption_risk_level(20)[0] is RiskLevel.MEDIUM
    assert adoption_risk_level(45)[0] is RiskLevel.HIGH
    level, message = adoption_risk_level(70)
    assert level is RiskLevel.CRITICAL
    assert "No social presence" in message


def test_unknown_sections_add_nothing() -> None:
    assert score_social_adoption(SocialMetrics(), holder_count=50) == 0


def test_profile_only() -> None:
    """Search skipped: tweet volume and engagement unknown."""
    social = SocialMetrics(follower_count=300, verified=False, account_age_days=30)
    assert score_social_adoption(social, holder_count=50) == 35 + 10


def test_search_only_skips_follower_adjustments() -> None:
    social = SocialMetrics(tweet_volume_24h=0, engagement=0.0)
    assert score_social_adoption(social, holder_count=10_000) == 30 + 20
