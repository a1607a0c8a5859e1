"""Tests for the shared client rate limiter."""

import asyncio

import pytest

from tokenrisk.parsers.rate_limiter import RateLimiter


@pytest.mark.asyncio
async def test_disabled_limiter_never_waits() -> None:
    limiter = RateLimiter(0)
    loop = asyncio.get_running_loop()
    start = loop.time()
    for _ in range(20):
        await limiter.acquire()
    assert loop.time() - start < 0.05


@pytest.mark.asyncio
async def test_calls_are_spaced() -> None:
    limiter = RateLimiter(20.0)  # 50ms apart
    loop = asyncio.get_running_loop()
    start = loop.time()
    await asyncio.gather(*(limiter.acquire() for _ in range(4)))
    assert loop.time() - start >= 0.14


@pytest.mark.asyncio
async def test_first_call_is_immediate() -> None:
    limiter = RateLimiter(1.0)
    loop = asyncio.get_running_loop()
    start = loop.time()
    await limiter.acquire()
    assert loop.time() - start < 0.05
