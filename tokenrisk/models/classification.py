"""Meme/utility classification types."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TokenHint:
    """What a classification service gets to look at."""

    symbol: str | None = None
    name: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class ClassificationVerdict:
    """Raw answer from a classification service."""

    is_meme: bool
    confidence: int  # 0-100
    reasoning: str = ""


@dataclass(frozen=True)
class ClassificationResult:
    """Classification as used by the scoring pipeline.

    resolved=False means no classification could be obtained; the engine then
    scores with the legacy 10-factor weights.
    """

    is_meme: bool
    confidence: int
    reasoning: str
    is_manual_override: bool = False
    resolved: bool = True
    source: str | None = None  # service that produced the verdict
