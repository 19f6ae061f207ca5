import pytest

from app.models.settings import (
    DEFAULT_STOP_WORDS,
    MatchingSettings,
    get_matching_settings,
    get_upload_settings,
)
from app.utils.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ["CV_EXPERIENCE_THRESHOLD", "CV_PHONE_SUFFIX_LENGTH",
                "CV_MIN_EXPERIENCE_WORD_LENGTH", "CV_STOP_WORDS", "MAX_PDF_BYTES"]:
        monkeypatch.delenv(key, raising=False)


class TestMatchingSettings:
    """Test cases for matching configuration"""

    def test_defaults(self):
        settings = get_matching_settings()
        assert settings.experience_threshold == 0.3
        assert settings.phone_suffix_length == 7
        assert settings.min_experience_word_length == 4
        assert settings.stop_words == DEFAULT_STOP_WORDS

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("CV_EXPERIENCE_THRESHOLD", "0.5")
        monkeypatch.setenv("CV_PHONE_SUFFIX_LENGTH", "9")
        monkeypatch.setenv("CV_STOP_WORDS", "Foo, BAR,,")
        settings = get_matching_settings()
        assert settings.experience_threshold == 0.5
        assert settings.phone_suffix_length == 9
        assert settings.stop_words == ["foo", "bar"]

    def test_invalid_value_raises_configuration_error(self, monkeypatch):
        monkeypatch.setenv("CV_EXPERIENCE_THRESHOLD", "lots")
        with pytest.raises(ConfigurationError) as exc_info:
            get_matching_settings()
        assert exc_info.value.details["config_key"] == "experience_threshold"

    def test_out_of_range_threshold(self):
        with pytest.raises(Exception):
            MatchingSettings(experience_threshold=1.5)


class TestUploadSettings:
    """Test cases for upload limits"""

    def test_default_limit(self):
        assert get_upload_settings().max_pdf_bytes == 10 * 1024 * 1024

    def test_override(self, monkeypatch):
        monkeypatch.setenv("MAX_PDF_BYTES", "1024")
        assert get_upload_settings().max_pdf_bytes == 1024


class TestSettingsSources:
    """Test cases for where settings values come from"""

    def test_empty_variable_keeps_default(self, monkeypatch):
        monkeypatch.setenv("CV_PHONE_SUFFIX_LENGTH", "")
        assert get_matching_settings().phone_suffix_length == 7

    def test_values_read_from_dotenv_file(self, monkeypatch, tmp_path):
        (tmp_path / ".env").write_text("CV_PHONE_SUFFIX_LENGTH=5\nMAX_PDF_BYTES=2048\nENVIRONMENT=testing\n")
        monkeypatch.chdir(tmp_path)
        assert get_matching_settings().phone_suffix_length == 5
        assert get_upload_settings().max_pdf_bytes == 2048

    def test_environment_beats_dotenv_file(self, monkeypatch, tmp_path):
        (tmp_path / ".env").write_text("CV_EXPERIENCE_THRESHOLD=0.8\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("CV_EXPERIENCE_THRESHOLD", "0.1")
        assert get_matching_settings().experience_threshold == 0.1

    def test_invalid_upload_limit(self, monkeypatch):
        monkeypatch.setenv("MAX_PDF_BYTES", "0")
        with pytest.raises(ConfigurationError) as exc_info:
            get_upload_settings()
        assert exc_info.value.details["config_key"] == "max_pdf_bytes"
