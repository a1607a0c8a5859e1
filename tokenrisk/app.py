"""Wires configured service clients into a RiskEngine."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from loguru import logger

from config.settings import Settings, settings
from tokenrisk.parsers.base import ClassificationService
from tokenrisk.parsers.keyword_classifier import ClassifierChain, KeywordClassifier
from tokenrisk.parsers.llm_classifier.client import LLMClassifierClient
from tokenrisk.parsers.twitter.client import TwitterClient
from tokenrisk.scoring.engine import RiskEngine


@asynccontextmanager
async def open_engine(cfg: Settings = settings) -> AsyncIterator[RiskEngine]:
    """Yield an engine backed by the clients enabled in settings.

    Clients are shared by every score() call made through the engine and
    closed on exit.
    """
    llm: LLMClassifierClient | None = None
    twitter: TwitterClient | None = None

    classifiers: list[ClassificationService] = []
    if cfg.enable_llm_classification and cfg.openrouter_api_key:
        llm = LLMClassifierClient(
            api_key=cfg.openrouter_api_key,
            model=cfg.llm_model,
            max_rps=cfg.llm_max_rps,
        )
        classifiers.append(llm)
        logger.info(f"LLM classification enabled ({cfg.llm_model})")
    if cfg.enable_keyword_classification:
        classifiers.append(KeywordClassifier())
        logger.info("Keyword classification enabled")

    classifier: ClassificationService | None = None
    if len(classifiers) == 1:
        classifier = classifiers[0]
    elif classifiers:
        classifier = ClassifierChain(classifiers, timeout=cfg.classification_timeout_sec)
    else:
        logger.warning("No classifier configured - legacy weights only")

    if cfg.enable_twitter and cfg.twitter_api_key:
        twitter = TwitterClient(api_key=cfg.twitter_api_key, max_rps=cfg.twitter_max_rps)
        logger.info("TwitterAPI.io enabled (social adoption)")

    engine = RiskEngine(
        classifier,
        twitter,
        meme_baseline=cfg.meme_baseline_score,
        large_cap_override_usd=cfg.large_cap_override_usd,
        upgrade_prompt_threshold=cfg.upgrade_prompt_threshold,
        # the chain gives each link its own timeout
        classification_timeout=cfg.classification_timeout_sec * max(1, len(classifiers)),
        social_timeout=cfg.social_timeout_sec,
    )
    try:
        yield engine
    finally:
        if llm is not None:
            await llm.close()
        if twitter is not None:
            await twitter.close()
