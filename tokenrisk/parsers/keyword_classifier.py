"""Rule-based meme detection and ordered classifier fallback."""

import asyncio
import re
from collections.abc import Sequence

from loguru import logger

from tokenrisk.models.classification import ClassificationVerdict, TokenHint
from tokenrisk.parsers.base import ClassificationService, ServiceError

MEME_KEYWORDS = (
    "MAGA", "TRUMP", "PEPE", "SHIB", "DOGE", "INU", "FLOKI",
    "MOON", "SAFE", "ELON", "BABY", "ROCKET", "WOJAK",
    "CAT", "DOG", "FROG", "APE", "BONK",
)


class KeywordClassifier:
    """Matches symbol/name/description against well-known meme stems.

    Symbols and names match on substrings (BABYDOGE, SHIBAINU). Descriptions
    are prose, so they match whole words only.
    """

    name = "keywords"

    def __init__(self, keywords: Sequence[str] = MEME_KEYWORDS) -> None:
        self._keywords = tuple(k.upper() for k in keywords)
        self._word_patterns = tuple(
            re.compile(rf"\b{re.escape(k)}\b") for k in self._keywords
        )

    async def classify(self, hint: TokenHint) -> ClassificationVerdict:
        labels = [(hint.symbol or "").upper(), (hint.name or "").upper()]
        description = (hint.description or "").upper()
        for keyword, pattern in zip(self._keywords, self._word_patterns):
            if any(keyword in text for text in labels) or pattern.search(description):
                return ClassificationVerdict(
                    is_meme=True,
                    confidence=80,
                    reasoning=f"Token name/symbol matches known meme pattern ({keyword})",
                )
        return ClassificationVerdict(
            is_meme=False,
            confidence=60,
            reasoning="No meme indicators detected (rule-based)",
        )


class ClassifierChain:
    """Tries classifiers in order; the first verdict wins.

    Each link gets its own timeout and error boundary. Raises ServiceError
    only when every link failed.
    """

    def __init__(
        self, classifiers: Sequence[ClassificationService], *, timeout: float = 8.0,
    ) -> None:
        if not classifiers:
            raise ValueError("ClassifierChain needs at least one classifier")
        self._classifiers = tuple(classifiers)
        self._timeout = timeout
        self.name = "+".join(getattr(c, "name", type(c).__name__) for c in self._classifiers)

    async def classify(self, hint: TokenHint) -> ClassificationVerdict:
        errors: list[str] = []
        for classifier in self._classifiers:
            label = getattr(classifier, "name", type(classifier).__name__)
            try:
                return await asyncio.wait_for(classifier.classify(hint), timeout=self._timeout)
            except asyncio.TimeoutError:
                errors.append(f"{label}: timeout")
            except Exception as e:
                errors.append(f"{label}: {e}")
            logger.debug(f"[CLASSIFY] {errors[-1]}, trying next classifier")
        raise ServiceError(f"All classifiers failed ({'; '.join(errors)})")
