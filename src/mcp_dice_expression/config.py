from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DICE_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Fixes the process-wide random source; leave unset to seed from the clock.
    seed: int | None = None
    log_level: str = "WARNING"


settings = Settings()
