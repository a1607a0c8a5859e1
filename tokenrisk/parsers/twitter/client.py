"""TwitterAPI.io client: social adoption signals for a token.

Uses TwitterAPI.io (not official X API) for affordable access.
Docs: https://docs.twitterapi.io/
"""

import asyncio
import re
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import httpx
from loguru import logger

from tokenrisk.models.social import SocialMetrics
from tokenrisk.parsers.base import ServiceError
from tokenrisk.parsers.rate_limiter import RateLimiter
from tokenrisk.parsers.twitter.models import TwitterAuthor, TwitterTweet

MAX_RETRIES = 2
RETRY_DELAYS = [1.0, 3.0]

# Symbols too generic to search for
GENERIC_SYMBOLS = {"SOL", "BTC", "ETH", "USD", "USDT", "USDC"}

_HANDLE_RE = re.compile(r"^@?([A-Za-z0-9_]{1,15})$")
_PROFILE_URL_RE = re.compile(r"(?:twitter\.com|x\.com)/([A-Za-z0-9_]{1,15})")


class TwitterApiError(ServiceError):
    """TwitterAPI.io error."""


def extract_twitter_handle(value: str | None) -> str | None:
    """Normalize '@name', 'name' or a twitter.com / x.com profile URL to 'name'."""
    if not value:
        return None
    value = value.strip()
    url_match = _PROFILE_URL_RE.search(value)
    if url_match:
        return url_match.group(1)
    handle_match = _HANDLE_RE.match(value)
    if handle_match:
        return handle_match.group(1)
    return None


def _parse_created_at(value: str) -> datetime | None:
    """TwitterAPI.io returns 'Thu Dec 13 08:41:26 +0000 2007'; accept ISO too."""
    if not value:
        return None
    try:
        return datetime.strptime(value, "%a %b %d %H:%M:%S %z %Y")
    except ValueError:
        pass
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


class TwitterClient:
    """Social-signal service backed by TwitterAPI.io."""

    BASE_URL = "https://api.twitterapi.io"
    name = "twitter"

    def __init__(
        self,
        api_key: str,
        max_rps: float = 1.0,
        *,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._rate_limiter = RateLimiter(max_rps)
        self._clock = clock
        self._client = httpx.AsyncClient(
            base_url=self.BASE_URL,
            timeout=15.0,
            headers={
                "X-API-Key": api_key,
                "Accept": "application/json",
            },
        )

    async def _request(self, method: str, path: str, **kwargs: object) -> dict:
        """Make rate-limited API request with retry on transient errors."""
        for attempt in range(MAX_RETRIES + 1):
            await self._rate_limiter.acquire()
            try:
                response = await self._client.request(method, path, **kwargs)
                if response.status_code == 429 or response.status_code >= 500:
                    if attempt < MAX_RETRIES:
                        await asyncio.sleep(RETRY_DELAYS[attempt])
                        continue
                    raise TwitterApiError(f"HTTP {response.status_code} after retries")
                response.raise_for_status()
                data = response.json()
                if not isinstance(data, dict):
                    raise TwitterApiError("Unexpected response payload")
                if data.get("status") == "error":
                    raise TwitterApiError(data.get("msg", "Unknown error"))
                return data
            except httpx.HTTPStatusError as e:
                raise TwitterApiError(
                    f"HTTP {e.response.status_code}: {e.response.text[:200]}"
                ) from e
            except (httpx.TimeoutException, httpx.ConnectError) as e:
                if attempt < MAX_RETRIES:
                    await asyncio.sleep(RETRY_DELAYS[attempt])
                    continue
                raise TwitterApiError(f"Request failed after {MAX_RETRIES + 1} attempts: {e}") from e
            except httpx.RequestError as e:
                raise TwitterApiError(f"Request failed: {e}") from e
            except ValueError as e:
                raise TwitterApiError(f"Invalid JSON: {e}") from e
        raise TwitterApiError("Max retries exceeded")

    async def get_user_info(self, username: str) -> TwitterAuthor | None:
        data = await self._request("GET", "/twitter/user/info", params={"userName": username})
        user_data = data.get("data", data)
        if isinstance(user_data, dict) and user_data:
            return TwitterAuthor.model_validate(user_data)
        return None

    async def search_recent(self, symbol: str) -> list[TwitterTweet]:
        """Tweets mentioning the token in the last 24h (retweets excluded)."""
        query = self._build_query(symbol)
        if not query:
            return []
        return await self._search(query)

    async def adoption_signal(
        self, symbol: str | None, handle: str | None,
    ) -> SocialMetrics | None:
        """Project profile + 24h discussion metrics.

        Fields from a lookup that was skipped or failed stay None. Returns
        None when nothing was looked up; raises TwitterApiError when every
        lookup failed.
        """
        username = extract_twitter_handle(handle)
        query = self._build_query(symbol) if symbol else ""
        if not username and not query:
            return None

        errors: list[str] = []
        user: TwitterAuthor | None = None
        tweets: list[TwitterTweet] | None = None

        if username:
            try:
                user = await self.get_user_info(username)
            except TwitterApiError as e:
                errors.append(f"user @{username}: {e}")

        if query:
            try:
                tweets = await self._search(query)
            except TwitterApiError as e:
                errors.append(f"search {symbol}: {e}")

        if user is None and tweets is None:
            raise TwitterApiError("; ".join(errors) or "no social data")
        for err in errors:
            logger.debug(f"[TWITTER] Partial data, {err}")

        tweet_volume: int | None = None
        engagement: float | None = None
        if tweets is not None:
            tweet_volume = len(tweets)
            total_engagement = sum(t.likeCount + t.retweetCount + t.replyCount for t in tweets)
            engagement = total_engagement / len(tweets) if tweets else 0.0

        account_age_days: int | None = None
        if user is not None:
            created = _parse_created_at(user.createdAt)
            if created is not None:
                account_age_days = max(0, (self._clock() - created).days)

        return SocialMetrics(
            handle=username,
            follower_count=user.followers if user else None,
            tweet_volume_24h=tweet_volume,
            engagement=engagement,
            verified=user.isBlueVerified if user else None,
            account_age_days=account_age_days,
        )

    async def _search(self, query: str) -> list[TwitterTweet]:
        data = await self._request(
            "GET",
            "/twitter/tweet/advanced_search",
            params={"query": query, "queryType": "Latest", "cursor": ""},
        )
        return self._parse_tweets(data)

    def _build_query(self, symbol: str) -> str:
        clean = symbol.strip().upper()
        if len(clean) < 2 or clean in GENERIC_SYMBOLS:
            return ""
        since = int((self._clock() - timedelta(days=1)).timestamp())
        return f'("${clean}" OR #{clean}) -filter:retweets since_time:{since}'

    def _parse_tweets(self, data: dict) -> list[TwitterTweet]:
        # API returns {tweets: [...]} directly or {data: {tweets: [...]}}
        if "tweets" in data:
            raw_tweets = data.get("tweets") or []
        elif isinstance(data.get("data"), dict):
            raw_tweets = data["data"].get("tweets") or []
        elif isinstance(data.get("data"), list):
            raw_tweets = data["data"]
        else:
            return []

        tweets: list[TwitterTweet] = []
        for raw in raw_tweets:
            if isinstance(raw, dict):
                tweets.append(TwitterTweet.model_validate(raw))
        return tweets

    async def close(self) -> None:
        await self._client.aclose()
