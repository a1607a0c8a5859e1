"""Social adoption signal returned by a social-signal service."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SocialMetrics:
    """Project account and 24h discussion metrics.

    None means the lookup behind that field did not run or failed:
    profile fields come from the account lookup, tweet fields from the
    24h search.
    """

    handle: str | None = None
    follower_count: int | None = None
    tweet_volume_24h: int | None = None
    engagement: float | None = None  # average likes + retweets + replies per tweet
    verified: bool | None = None
    account_age_days: int | None = None
