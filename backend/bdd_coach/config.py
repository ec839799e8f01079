import os
from functools import lru_cache

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    default_passing_score: float = Field(70.0, ge=0.0, le=100.0, alias="BDD_COACH_DEFAULT_PASSING_SCORE")
    weak_area_threshold: float = Field(60.0, ge=0.0, le=100.0, alias="BDD_COACH_WEAK_AREA_THRESHOLD")
    recommendations_per_area: int = Field(2, ge=0, alias="BDD_COACH_RECOMMENDATIONS_PER_AREA")
    log_level: str = Field("INFO", alias="BDD_COACH_LOG_LEVEL")

    class Config:
        env_file = os.getenv("ENV_FILE", ".env")
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache
def get_settings() -> Settings:
    try:
        return Settings()  # type: ignore[call-arg]
    except ValidationError as exc:
        raise RuntimeError(f"Invalid backend configuration: {exc}") from exc
