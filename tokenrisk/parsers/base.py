"""Interfaces for the external services the engine consults."""

from typing import Protocol

from tokenrisk.models.classification import ClassificationVerdict, TokenHint
from tokenrisk.models.social import SocialMetrics


class ServiceError(Exception):
    """External service failed or returned something unusable."""


class ClassificationService(Protocol):
    async def classify(self, hint: TokenHint) -> ClassificationVerdict:
        """Return a meme/utility verdict or raise."""
        ...


class SocialSignalService(Protocol):
    async def adoption_signal(
        self, symbol: str | None, handle: str | None,
    ) -> SocialMetrics | None:
        """Return social metrics, None when there is nothing to report, or raise."""
        ...
