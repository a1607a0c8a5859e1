"""Score one token from a JSON request.

    python -m tokenrisk.main request.json
    cat request.json | python -m tokenrisk.main --plan PREMIUM

Request: {"plan": "FREE" | "PREMIUM", "metrics": {...}, "metadata": {...}}.
The assessment is printed to stdout as JSON; logs go to stderr.
"""

import argparse
import asyncio
import sys
from pathlib import Path

from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from config.settings import Settings, settings
from tokenrisk.app import open_engine
from tokenrisk.models.assessment import Plan
from tokenrisk.models.token import ScoringMetadata, TokenMetrics
from tokenrisk.utils.logger import setup_logger


class ScoreRequest(BaseModel):
    plan: Plan = Plan.FREE
    metrics: TokenMetrics
    metadata: ScoringMetadata = Field(default_factory=ScoringMetadata)


async def run(request: ScoreRequest, cfg: Settings = settings) -> str:
    async with open_engine(cfg) as engine:
        result = await engine.score(request.metrics, request.plan, request.metadata)
    return result.model_dump_json(indent=2)


def main(argv: list[str] | None = None, cfg: Settings = settings) -> int:
    parser = argparse.ArgumentParser(description="Score token risk")
    parser.add_argument("request", nargs="?", help="JSON request file (default: stdin)")
    parser.add_argument("--plan", choices=[p.value for p in Plan], help="Override the request plan")
    args = parser.parse_args(argv)

    setup_logger(
        json_logs=cfg.json_logs,
        level=cfg.log_level,
        log_dir=cfg.log_dir or None,
        console=sys.stderr,
    )

    raw = Path(args.request).read_text(encoding="utf-8") if args.request else sys.stdin.read()
    try:
        request = ScoreRequest.model_validate_json(raw)
    except ValidationError as e:
        logger.error(f"Invalid request: {e}")
        return 2

    if args.plan:
        request = request.model_copy(update={"plan": Plan(args.plan)})

    print(asyncio.run(run(request, cfg)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
