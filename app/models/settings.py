"""
Matching and Upload Settings
"""
from typing import Annotated, List

from pydantic import Field, ValidationError as PydanticValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from app.utils.exceptions import ConfigurationError

DEFAULT_STOP_WORDS = [
    "the", "and", "with", "that", "this", "have", "been", "work", "experience",
]


class MatchingSettings(BaseSettings):
    """Thresholds used by the validation engine, overridable via CV_* variables"""
    model_config = SettingsConfigDict(env_prefix="CV_", env_file=".env", env_ignore_empty=True, extra="ignore")

    experience_threshold: float = Field(default=0.3, ge=0.0, le=1.0, description="Minimum share of experience words found in the CV")
    phone_suffix_length: int = Field(default=7, ge=1, description="Trailing digits compared when matching phone numbers")
    min_experience_word_length: int = Field(default=4, ge=1, description="Experience words shorter than this are ignored")
    # CV_STOP_WORDS is a plain comma list, not JSON
    stop_words: Annotated[List[str], NoDecode] = Field(default_factory=lambda: list(DEFAULT_STOP_WORDS), description="Experience words that never count")

    @field_validator('stop_words', mode='before')
    @classmethod
    def split_stop_words(cls, v):
        if isinstance(v, str):
            v = v.split(",")
        return [w.strip().lower() for w in v if w.strip()]


class UploadSettings(BaseSettings):
    """Limits applied to uploaded documents, read from MAX_PDF_BYTES"""
    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True, extra="ignore")

    max_pdf_bytes: int = Field(default=10 * 1024 * 1024, ge=1, description="Largest accepted document in bytes")


def _load(model):
    try:
        return model()
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = first["loc"][0] if first.get("loc") else None
        raise ConfigurationError(
            f"Invalid {model.__name__} value for '{field}': {first['msg']}",
            config_key=str(field),
            config_value=first.get("input"),
            cause=e
        ) from e


def get_matching_settings() -> MatchingSettings:
    return _load(MatchingSettings)


def get_upload_settings() -> UploadSettings:
    return _load(UploadSettings)
