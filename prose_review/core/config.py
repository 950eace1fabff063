import logging

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # .env wird automatisch gelesen
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "ProseReviewAPI"
    environment: str = "dev"

    # LLM (Report-Erzeugung)
    llm_model: str = "gpt-4o-mini"
    llm_temperature: float = 0.25
    llm_max_tokens: int = 16384

    log_level: str = "INFO"

    # Quick-Fix-Policy
    hint_only_categories: list[str] = ["consistency", "structure", "word_choice"]
    quick_fix_max_length: int = 100

    # Fragmentgröße, wenn ein fertiger Report über /review eingespielt wird
    replay_chunk_size: int = 64

    # Wörter, für die Spelling-Issues unterdrückt werden (JSON-Liste in der ENV)
    user_dictionary: list[str] = []


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Setzt das Root-Logging einmalig (Level aus settings.log_level)."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
