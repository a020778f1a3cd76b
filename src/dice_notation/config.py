import logging

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DICE_NOTATION_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Fixed seed for reproducible rolls. Unset means secrets.SystemRandom.
    seed: int | None = None

    # Upper bounds enforced on every dice term before rolling from text.
    max_quantity: int = 100
    max_sides: int = 1000

    # Numbers and dice terms allowed in one expression.
    max_terms: int = 100

    log_level: str = "WARNING"


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
