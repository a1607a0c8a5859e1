from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"
    json_logs: bool = False

    # Meme/utility classification via OpenRouter
    openrouter_api_key: str = ""
    enable_llm_classification: bool = True
    llm_model: str = "google/gemini-2.5-flash-lite"
    llm_max_rps: float = 2.0
    enable_keyword_classification: bool = True  # rule-based fallback when LLM fails
    classification_timeout_sec: float = 8.0

    # TwitterAPI.io (social adoption signals)
    twitter_api_key: str = ""
    enable_twitter: bool = True
    twitter_max_rps: float = 1.0
    social_timeout_sec: float = 8.0

    # Scoring calibration
    meme_baseline_score: int = 55  # floor for meme-classified tokens
    large_cap_override_usd: float = 50_000_000_000  # contract control forced to 0 above this
    upgrade_prompt_threshold: int = 40  # free plan shows upgrade prompt above this score


settings = Settings()
