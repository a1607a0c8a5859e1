"""Tests for rule-based classification and the classifier chain."""

import asyncio

import pytest

from tests.factories import FakeClassifier
from tokenrisk.models.classification import ClassificationVerdict, TokenHint
from tokenrisk.parsers.base import ServiceError
from tokenrisk.parsers.keyword_classifier import ClassifierChain, KeywordClassifier


class HangingClassifier:
    name = "hanging"

    async def classify(self, hint: TokenHint) -> ClassificationVerdict:
        await asyncio.sleep(5)
        return ClassificationVerdict(is_meme=False, confidence=99)


class TestKeywordClassifier:
    @pytest.mark.asyncio
    async def test_meme_symbol(self) -> None:
        verdict = await KeywordClassifier().classify(TokenHint(symbol="shib"))
        assert verdict.is_meme is True
        assert verdict.confidence == 80
        assert "SHIB" in verdict.reasoning

    @pytest.mark.asyncio
    async def test_meme_stem_in_name(self) -> None:
        verdict = await KeywordClassifier().classify(TokenHint(symbol="XYZ", name="Baby Floki Inu"))
        assert verdict.is_meme is True

    @pytest.mark.asyncio
    async def test_description_is_checked(self) -> None:
        verdict = await KeywordClassifier().classify(
            TokenHint(symbol="WIF", description="Just a dog wearing a hat"),
        )
        assert verdict.is_meme is True

    @pytest.mark.asyncio
    async def test_description_matches_whole_words_only(self) -> None:
        verdict = await KeywordClassifier().classify(TokenHint(
            symbol="XYZ",
            name="Xyz Protocol",
            description="A decentralized application layer with safety audits and escape hatches",
        ))
        assert verdict.is_meme is False
        assert verdict.confidence == 60

    @pytest.mark.asyncio
    async def test_no_match_is_utility(self) -> None:
        verdict = await KeywordClassifier().classify(TokenHint(symbol="LINK", name="Chainlink"))
        assert verdict.is_meme is False
        assert verdict.confidence == 60
        assert verdict.reasoning == "No meme indicators detected (rule-based)"

    @pytest.mark.asyncio
    async def test_custom_keywords(self) -> None:
        verdict = await KeywordClassifier(keywords=["hamster"]).classify(TokenHint(name="HamsterKombat"))
        assert verdict.is_meme is True


class TestClassifierChain:
    def test_requires_classifiers(self) -> None:
        with pytest.raises(ValueError):
            ClassifierChain([])

    def test_name_lists_links(self) -> None:
        chain = ClassifierChain([FakeClassifier(), KeywordClassifier()])
        assert chain.name == "fake+keywords"

    @pytest.mark.asyncio
    async def test_first_verdict_wins(self) -> None:
        first = FakeClassifier(ClassificationVerdict(is_meme=False, confidence=95, reasoning="Lending protocol"))
        chain = ClassifierChain([first, KeywordClassifier()])
        verdict = await chain.classify(TokenHint(symbol="DOGE"))
        assert verdict.reasoning == "Lending protocol"

    @pytest.mark.asyncio
    async def test_falls_through_on_error(self) -> None:
        chain = ClassifierChain([FakeClassifier(error=ServiceError("HTTP 503")), KeywordClassifier()])
        verdict = await chain.classify(TokenHint(symbol="PEPE"))
        assert verdict.is_meme is True
        assert verdict.confidence == 80

    @pytest.mark.asyncio
    async def test_falls_through_on_timeout(self) -> None:
        chain = ClassifierChain([HangingClassifier(), KeywordClassifier()], timeout=0.01)
        verdict = await chain.classify(TokenHint(symbol="LINK"))
        assert verdict.confidence == 60

    @pytest.mark.asyncio
    async def test_all_links_failed(self) -> None:
        chain = ClassifierChain(
            [FakeClassifier(error=ServiceError("down")), HangingClassifier()], timeout=0.01,
        )
        with pytest.raises(ServiceError, match="All classifiers failed"):
            await chain.classify(TokenHint(symbol="LINK"))
