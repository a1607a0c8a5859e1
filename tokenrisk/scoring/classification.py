"""Meme/utility classification for a scoring call.

A manual override always wins. Otherwise the classification service is asked
once, under a timeout; any failure degrades to an unresolved result, which
sends the engine down the legacy weighting path.
"""

import asyncio

from loguru import logger

from tokenrisk.models.classification import ClassificationResult, ClassificationVerdict, TokenHint
from tokenrisk.models.token import ManualClassification
from tokenrisk.parsers.base import ClassificationService

DEFAULT_TIMEOUT_SEC = 8.0


def unresolved(reasoning: str) -> ClassificationResult:
    return ClassificationResult(
        is_meme=False, confidence=0, reasoning=reasoning, resolved=False,
    )


def _check_verdict(verdict: object) -> ClassificationVerdict:
    if not isinstance(verdict, ClassificationVerdict):
        raise TypeError(f"unexpected verdict type {type(verdict).__name__}")
    if not isinstance(verdict.is_meme, bool):
        raise TypeError("is_meme must be a bool")
    if not isinstance(verdict.confidence, int) or not 0 <= verdict.confidence <= 100:
        raise ValueError(f"confidence out of range: {verdict.confidence!r}")
    return verdict


async def resolve_classification(
    service: ClassificationService | None,
    *,
    manual: ManualClassification | None = None,
    symbol: str | None = None,
    name: str | None = None,
    description: str | None = None,
    timeout: float = DEFAULT_TIMEOUT_SEC,
) -> ClassificationResult:
    """Resolve classification. Never raises."""
    if manual is not None:
        return ClassificationResult(
            is_meme=manual is ManualClassification.MEME,
            confidence=100,
            reasoning="manual override",
            is_manual_override=True,
            source="manual",
        )

    if not (symbol or name):
        return unresolved("no symbol or name to classify")
    if service is None:
        return unresolved("classification service not configured")

    hint = TokenHint(symbol=symbol, name=name, description=description)
    try:
        verdict = _check_verdict(
            await asyncio.wait_for(service.classify(hint), timeout=timeout)
        )
    except asyncio.TimeoutError:
        logger.warning(f"[CLASSIFY] Timed out after {timeout}s for {symbol or name}")
        return unresolved("classification timed out")
    except Exception as e:
        logger.warning(f"[CLASSIFY] Failed for {symbol or name}: {type(e).__name__}: {e}")
        return unresolved("classification unavailable")

    logger.debug(
        f"[CLASSIFY] {symbol or name}: {'MEME' if verdict.is_meme else 'UTILITY'} "
        f"({verdict.confidence}%)"
    )
    return ClassificationResult(
        is_meme=verdict.is_meme,
        confidence=verdict.confidence,
        reasoning=verdict.reasoning,
        source=getattr(service, "name", type(service).__name__),
    )
