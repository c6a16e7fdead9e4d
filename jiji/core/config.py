from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from jiji.core.query.keywords import DEFAULT_STOP_WORDS, KeywordConfig


class Settings(BaseSettings):
    DATABASE_URL: str
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # "production" hides internal error details from clients
    ENVIRONMENT: str = "development"
    API_VERSION: str = "v1"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"
    DB_ECHO: bool = False
    RUN_MIGRATIONS: bool = True

    # Query pipeline
    RESOURCE_SAMPLE_LIMIT: int = Field(default=10, gt=0)
    KEYWORD_STOP_WORDS: Optional[List[str]] = None
    KEYWORD_MAX_KEYWORDS: int = 5
    KEYWORD_MIN_WORD_LENGTH: int = 3

    # This tells Pydantic to read from the .env file
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    def keyword_config(self) -> KeywordConfig:
        stop_words = (
            DEFAULT_STOP_WORDS
            if self.KEYWORD_STOP_WORDS is None
            else self.KEYWORD_STOP_WORDS
        )
        return KeywordConfig.from_mapping(
            {
                "stop_words": stop_words,
                "max_keywords": self.KEYWORD_MAX_KEYWORDS,
                "min_word_length": self.KEYWORD_MIN_WORD_LENGTH,
            }
        )


# Create a single instance of the settings to use everywhere
settings = Settings()
