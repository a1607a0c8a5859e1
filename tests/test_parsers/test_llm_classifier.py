"""Tests for the OpenRouter classification client."""

import json
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from tokenrisk.models.classification import TokenHint
from tokenrisk.parsers.llm_classifier import client as llm_module
from tokenrisk.parsers.llm_classifier.client import (
    ClassificationServiceError,
    LLMClassifierClient,
    parse_verdict,
)


def _completion(content: str, status_code: int = 200) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = content
    resp.json.return_value = {"choices": [{"message": {"content": content}}]}
    return resp


def _client(*responses) -> LLMClassifierClient:
    client = LLMClassifierClient(api_key="test-key", max_rps=0)
    client._client = AsyncMock()
    client._client.post = AsyncMock(side_effect=list(responses))
    return client


@pytest.fixture(autouse=True)
def _no_retry_delay(monkeypatch) -> None:
    monkeypatch.setattr(llm_module, "RETRY_DELAYS", [0.0, 0.0])


class TestParseVerdict:
    def test_plain_json(self) -> None:
        verdict = parse_verdict(
            '{"classification": "MEME", "confidence": 92, "reasoning": "Dog-themed token"}'
        )
        assert verdict.is_meme is True
        assert verdict.confidence == 92
        assert verdict.reasoning == "Dog-themed token"

    def test_code_fence_and_chatter(self) -> None:
        content = 'Sure!\n```json\n{"classification": "utility", "confidence": 75, "reasoning": "DEX"}\n```'
        verdict = parse_verdict(content)
        assert verdict.is_meme is False
        assert verdict.confidence == 75

    def test_confidence_clamped(self) -> None:
        verdict = parse_verdict('{"classification": "MEME", "confidence": 140}')
        assert verdict.confidence == 100
        assert verdict.reasoning == ""

    def test_no_json(self) -> None:
        with pytest.raises(ClassificationServiceError):
            parse_verdict("I think it is a meme coin")

    def test_broken_json(self) -> None:
        with pytest.raises(ClassificationServiceError):
            parse_verdict('{"classification": "MEME", "confidence": }')

    def test_unknown_label(self) -> None:
        with pytest.raises(ClassificationServiceError):
            parse_verdict('{"classification": "GOVERNANCE", "confidence": 80}')

    def test_missing_label(self) -> None:
        with pytest.raises(ClassificationServiceError):
            parse_verdict('{"confidence": 80}')


class TestLLMClassifierClient:
    @pytest.mark.asyncio
    async def test_classify(self) -> None:
        client = _client(_completion(json.dumps({
            "classification": "MEME", "confidence": 88, "reasoning": "Frog meme",
        })))

        verdict = await client.classify(TokenHint(symbol="PEPE", name="Pepe", description="frog"))

        assert verdict.is_meme is True
        assert verdict.confidence == 88
        payload = client._client.post.call_args.kwargs["json"]
        prompt = payload["messages"][0]["content"]
        assert "Token: Pepe (PEPE)" in prompt
        assert "Description: frog" in prompt
        assert payload["model"] == "google/gemini-2.5-flash-lite"

    @pytest.mark.asyncio
    async def test_long_description_truncated(self) -> None:
        client = _client(_completion('{"classification": "UTILITY", "confidence": 70}'))
        await client.classify(TokenHint(symbol="LINK", description="x" * 2000))
        prompt = client._client.post.call_args.kwargs["json"]["messages"][0]["content"]
        assert "x" * 500 in prompt
        assert "x" * 501 not in prompt

    @pytest.mark.asyncio
    async def test_retries_rate_limit(self) -> None:
        client = _client(
            _completion("", status_code=429),
            _completion('{"classification": "UTILITY", "confidence": 81}'),
        )
        verdict = await client.classify(TokenHint(symbol="AAVE"))
        assert verdict.is_meme is False
        assert client._client.post.await_count == 2

    @pytest.mark.asyncio
    async def test_gives_up_after_retries(self) -> None:
        client = _client(*[_completion("", status_code=503) for _ in range(3)])
        with pytest.raises(ClassificationServiceError):
            await client.classify(TokenHint(symbol="AAVE"))
        assert client._client.post.await_count == 3

    @pytest.mark.asyncio
    async def test_retries_timeout(self) -> None:
        client = _client(
            httpx.ReadTimeout("slow"),
            _completion('{"classification": "MEME", "confidence": 60}'),
        )
        verdict = await client.classify(TokenHint(symbol="BONK"))
        assert verdict.is_meme is True

    @pytest.mark.asyncio
    async def test_client_error_not_retried(self) -> None:
        client = _client(_completion("bad key", status_code=401))
        with pytest.raises(ClassificationServiceError, match="401"):
            await client.classify(TokenHint(symbol="AAVE"))
        assert client._client.post.await_count == 1

    @pytest.mark.asyncio
    async def test_unexpected_shape(self) -> None:
        resp = _completion("")
        resp.json.return_value = {"error": "overloaded"}
        client = _client(resp)
        with pytest.raises(ClassificationServiceError):
            await client.classify(TokenHint(symbol="AAVE"))

    @pytest.mark.asyncio
    async def test_close(self) -> None:
        client = _client()
        await client.close()
        client._client.aclose.assert_awaited_once()
