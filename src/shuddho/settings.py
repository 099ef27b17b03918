from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)


DEFAULT_HISTORY_FILE = Path.home() / ".cache" / "shuddho" / "search_history.json"

LookupProvider = Literal["gemini"]


class GeminiProviderAccess(BaseModel):
    # None lets google-genai fall back to GEMINI_API_KEY / GOOGLE_API_KEY
    api_key: SecretStr | None = None


class ProviderAccessSettings(BaseModel):
    gemini: GeminiProviderAccess = Field(default_factory=GeminiProviderAccess)


class WordLookupSettings(BaseModel):
    provider: LookupProvider = "gemini"
    model: str = "gemini-3-pro-preview"
    max_attempts: int = Field(default=1, ge=1, description="1 disables automatic retries")


class PronunciationAudioSettings(BaseModel):
    model: str = "gemini-2.5-flash-preview-tts"
    voice_name: str = "Kore"
    sample_rate: int = Field(default=24000, gt=0)
    channels: int = Field(default=1, ge=1)
    max_attempts: int = Field(default=1, ge=1)


class HistorySettings(BaseModel):
    file: Path = DEFAULT_HISTORY_FILE
    capacity: int = Field(default=6, ge=1)


class Settings(BaseSettings):
    """Application settings.

    Sources, highest priority first: CLI arguments (when run through
    ``CliApp``), init kwargs, ``SHUDDHO__*`` environment variables, ``.env``,
    ``shuddho.yaml``.
    """

    model_config = SettingsConfigDict(
        env_prefix="SHUDDHO__",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        yaml_file="shuddho.yaml",
        yaml_file_encoding="utf-8",
        cli_prog_name="shuddho",
        cli_kebab_case=True,
        cli_implicit_flags=True,
        nested_model_default_partial_update=True,
    )

    word: str | None = Field(
        default=None,
        description="Look up a single word and exit instead of starting the interactive console",
    )
    speak: bool = Field(default=False, description="With --word: also play the pronunciation")
    show_usage: bool = Field(default=False, description="Print Gemini token usage after each lookup")
    log_level: str = "WARNING"

    providers: ProviderAccessSettings = Field(default_factory=ProviderAccessSettings)
    lookup: WordLookupSettings = Field(default_factory=WordLookupSettings)
    audio: PronunciationAudioSettings = Field(default_factory=PronunciationAudioSettings)
    history: HistorySettings = Field(default_factory=HistorySettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )
