"""Meme/utility classification via OpenRouter.

Uses Gemini 2.5 Flash Lite by default: ~1s latency, cheap, good enough for a
two-way classification. Retries transient errors itself; anything it cannot
recover from is raised as ClassificationServiceError.
"""

import asyncio
import json
import re

import httpx
from loguru import logger

from tokenrisk.models.classification import ClassificationVerdict, TokenHint
from tokenrisk.parsers.base import ServiceError
from tokenrisk.parsers.rate_limiter import RateLimiter

MAX_RETRIES = 2
RETRY_DELAYS = [2.0, 5.0]

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)

PROMPT_TEMPLATE = """Classify this cryptocurrency token as MEME or UTILITY.

{token_context}

MEME indicators:
- Names: PEPE, SHIB, DOGE, MAGA, TRUMP, MOON, SAFE, INU, FLOKI
- Themes: dogs, cats, political figures, internet memes
- Purpose: purely speculative, no utility
- Community: hype-driven, sentiment-based

UTILITY indicators:
- Clear product or service
- Technical whitepaper
- DeFi protocol (staking, lending, DEX)
- Infrastructure (oracles, bridges)
- Gaming, NFT platforms

Respond ONLY in this JSON format (no markdown):
{{"classification": "MEME" or "UTILITY", "confidence": <0-100>, "reasoning": "one sentence"}}"""


class ClassificationServiceError(ServiceError):
    """Classification API error or unparseable answer."""


class LLMClassifierClient:
    """Token classification via OpenRouter chat completions."""

    BASE_URL = "https://openrouter.ai/api/v1"
    name = "llm"

    def __init__(
        self,
        api_key: str,
        model: str = "google/gemini-2.5-flash-lite",
        max_rps: float = 2.0,
    ) -> None:
        self._rate_limiter = RateLimiter(max_rps)
        self._model = model
        self._client = httpx.AsyncClient(
            base_url=self.BASE_URL,
            timeout=30.0,  # LLM responses can be slow
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
        )

    async def classify(self, hint: TokenHint) -> ClassificationVerdict:
        context_parts = [
            f"Token: {hint.name or 'Unknown'} ({hint.symbol or 'Unknown'})",
            f"Description: {(hint.description or 'None provided')[:500]}",
        ]
        prompt = PROMPT_TEMPLATE.format(token_context="\n".join(context_parts))

        for attempt in range(MAX_RETRIES + 1):
            try:
                await self._rate_limiter.acquire()
                resp = await self._client.post(
                    "/chat/completions",
                    json={
                        "model": self._model,
                        "messages": [{"role": "user", "content": prompt}],
                        "max_tokens": 200,
                        "temperature": 0.1,
                    },
                )
            except (httpx.TimeoutException, httpx.ConnectError) as e:
                if attempt < MAX_RETRIES:
                    delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
                    logger.debug(f"[LLM] {type(e).__name__}, retry in {delay}s")
                    await asyncio.sleep(delay)
                    continue
                raise ClassificationServiceError(
                    f"Request failed after {MAX_RETRIES + 1} attempts: {e}"
                ) from e
            except httpx.RequestError as e:
                raise ClassificationServiceError(f"Request failed: {e}") from e

            if resp.status_code == 429 or resp.status_code >= 500:
                if attempt < MAX_RETRIES:
                    delay = RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)]
                    logger.debug(f"[LLM] HTTP {resp.status_code}, retrying in {delay}s")
                    await asyncio.sleep(delay)
                    continue
                raise ClassificationServiceError(f"HTTP {resp.status_code} after retries")

            if resp.status_code != 200:
                raise ClassificationServiceError(f"HTTP {resp.status_code}: {resp.text[:200]}")

            try:
                data = resp.json()
                content = data["choices"][0]["message"]["content"]
            except (ValueError, KeyError, IndexError, TypeError) as e:
                raise ClassificationServiceError(f"Unexpected response shape: {e}") from e

            return parse_verdict(content)

        raise ClassificationServiceError("Max retries exceeded")

    async def close(self) -> None:
        await self._client.aclose()


def parse_verdict(content: str) -> ClassificationVerdict:
    """Parse the model's JSON answer; tolerates code fences and chatter around it."""
    match = _JSON_OBJECT.search(content or "")
    if not match:
        raise ClassificationServiceError(f"No JSON in response: {(content or '')[:200]}")

    try:
        data = json.loads(match.group(0))
        label = str(data["classification"]).strip().upper()
        confidence = int(data.get("confidence", 50))
    except (json.JSONDecodeError, KeyError, ValueError, TypeError) as e:
        raise ClassificationServiceError(f"Parse failed: {e}, content: {content[:200]}") from e

    if label not in {"MEME", "UTILITY"}:
        raise ClassificationServiceError(f"Unknown classification {label!r}")

    return ClassificationVerdict(
        is_meme=label == "MEME",
        confidence=max(0, min(100, confidence)),
        reasoning=str(data.get("reasoning", "")),
    )
