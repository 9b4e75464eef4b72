"""
Application configuration management for the sequence_layout package.

This module exposes the ``AppConfig`` class which centralizes reading and
validating settings from multiple sources in the following precedence:

1. Environment variables (highest priority).
2. User configuration file (``~/.sequence_layout/config.json`` by default).
3. Immutable default settings bundled with the package
   (``settings/default_settings.json``).

The configuration is decomposed into focused sub-models to keep the codebase
extensible and easy to reason about when new settings are introduced.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple, Type

from pydantic import BaseModel, Field, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    InitSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parent / "default_settings.json"
DEFAULT_USER_CONFIG_PATH = Path.home() / ".sequence_layout" / "config.json"


class ViewerSettings(BaseModel):
    """Default view state and navigation parameters."""

    row_width: int = Field(20, gt=0)
    row_count: int = Field(15, ge=0)
    row_width_choices: List[int] = Field(default_factory=lambda: [10, 20, 30, 50])
    page_rows: int = Field(5, gt=0, description="Rows skipped by previous/next")
    match_shortcut_limit: int = Field(10, ge=0)


class ColorPaletteSettings(BaseModel):
    """User-customizable colors with sensible defaults."""

    background: str = "#FFFFFF"
    foreground: str = "#000000"
    bases: Dict[str, str] = Field(
        default_factory=lambda: {
            "A": "#FF6B6B",
            "T": "#4ECDC4",
            "G": "#45B7D1",
            "C": "#FFA726",
        }
    )
    match: str = "#FFEB3B"
    match_outline: str = "#F57F17"
    fallback: str = "#808080"
    highlights: Dict[str, str] = Field(default_factory=dict)


class AnnotationTypeSettings(BaseModel):
    """Display label and default color of a single annotation type."""

    label: str
    color: str


def _default_annotation_types() -> Dict[str, AnnotationTypeSettings]:
    return {
        "gene": AnnotationTypeSettings(label="Gene", color="#4CAF50"),
        "promoter": AnnotationTypeSettings(label="Promoter", color="#FF9800"),
        "enhancer": AnnotationTypeSettings(label="Enhancer", color="#9C27B0"),
        "exon": AnnotationTypeSettings(label="Exon", color="#2196F3"),
        "intron": AnnotationTypeSettings(label="Intron", color="#607D8B"),
        "utr": AnnotationTypeSettings(label="UTR", color="#795548"),
        "restriction": AnnotationTypeSettings(label="Restriction Site", color="#F44336"),
        "custom": AnnotationTypeSettings(label="Custom", color="#00BCD4"),
    }


class DataSourceSettings(BaseModel):
    """Configuration for data retrieval."""

    type: str = Field("sample", description="Data source type: file or sample")
    config: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("type")
    @classmethod
    def validate_type(cls, value: str) -> str:
        allowed = {"file", "sample"}
        if value not in allowed:
            raise ValueError(f"Unsupported data source type '{value}'. Allowed: {allowed}")
        return value


class JsonFileSettingsSource(PydanticBaseSettingsSource):
    """Settings source that returns the whole content of one JSON file."""

    def __init__(self, settings_cls: Type[BaseSettings], path: Path):
        super().__init__(settings_cls)
        self.path = Path(path)

    def get_field_value(self, field: FieldInfo, field_name: str) -> Tuple[Any, str, bool]:
        # Whole-file source; values are returned from __call__.
        return None, field_name, False

    def __call__(self) -> Dict[str, Any]:
        if self.path.exists():
            return _load_json_settings(self.path)
        return {}


class AppConfig(BaseSettings):
    """Central application configuration.

    The class leverages ``BaseSettings`` to merge environment variables,
    user overrides, and bundled defaults into a single typed interface.
    """

    viewer: ViewerSettings = Field(default_factory=ViewerSettings)
    color_palette: ColorPaletteSettings = Field(default_factory=ColorPaletteSettings)
    annotation_types: Dict[str, AnnotationTypeSettings] = Field(default_factory=_default_annotation_types)
    data_source: DataSourceSettings = Field(default_factory=DataSourceSettings)

    # Tracks the resolved user configuration path so helper classes can persist
    # user edits (e.g., custom colors) back to disk.
    user_config_path: Path = Field(default=DEFAULT_USER_CONFIG_PATH, exclude=True)

    model_config = SettingsConfigDict(
        env_prefix="SEQUENCE_LAYOUT_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        user_path = DEFAULT_USER_CONFIG_PATH
        if isinstance(init_settings, InitSettingsSource):
            user_path = Path(init_settings.init_kwargs.get("user_config_path", DEFAULT_USER_CONFIG_PATH))

        return (
            env_settings,
            JsonFileSettingsSource(settings_cls, user_path),
            JsonFileSettingsSource(settings_cls, DEFAULT_SETTINGS_PATH),
            init_settings,
            file_secret_settings,
        )

    def save_user_settings(self) -> None:
        """Persist the current configuration to the user config path.

        Only stores serializable settings to keep the file lean.
        """

        payload = json.loads(self.model_dump_json(exclude={"user_config_path"}))
        _write_json_settings(self.user_config_path, payload)


def _load_json_settings(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in settings file '{path}'") from exc


def _write_json_settings(path: Path, data: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
