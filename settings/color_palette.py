"""
Color palette management for sequence_layout.

The :class:`ColorPalette` class reads user-provided colors from
:class:`settings.config.AppConfig` while preserving defaults from the bundled
configuration. User updates can be persisted back to the user configuration
file, keeping the rest of the application decoupled from storage concerns.

The layout engine itself never looks at colors; the palette is handed to the
external renderer next to the computed layout.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping, Optional

from .config import AppConfig


class ColorPalette:
    """Access and mutate user-customizable colors."""

    def __init__(self, config: AppConfig):
        self._config = config
        self._colors: Mapping[str, str] = self._build_cache()

    def _build_cache(self) -> Mapping[str, str]:
        palette = self._config.color_palette
        return MappingProxyType(
            {
                "background": palette.background,
                "foreground": palette.foreground,
                "match": palette.match,
                "match_outline": palette.match_outline,
                "fallback": palette.fallback,
                **palette.highlights,
            }
        )

    def get_base_color(self, symbol: str) -> str:
        """Return the color of a nucleotide; unknown symbols get the fallback color."""

        return self._config.color_palette.bases.get(symbol.upper(), self._colors["fallback"])

    def get_match_color(self) -> str:
        return self._colors["match"]

    def get_feature_color(self, feature_name: str) -> Optional[str]:
        """Return the color associated with a feature or None if missing."""

        return self._colors.get(feature_name)

    def as_dict(self) -> Dict[str, object]:
        """Serializable snapshot handed to the renderer."""

        return {
            **dict(self._colors),
            "bases": dict(self._config.color_palette.bases),
        }

    def set_custom_color(self, key: str, value: str) -> None:
        """Persist a custom color to the user configuration file.

        The change is written to disk immediately and reflected in the
        underlying :class:`AppConfig` instance. Single-letter keys are
        treated as nucleotide colors.
        """

        palette = self._config.color_palette
        if key in {"background", "foreground", "match", "match_outline", "fallback"}:
            setattr(palette, key, value)
        elif len(key) == 1:
            palette.bases = {**palette.bases, key.upper(): value}
        else:
            palette.highlights = {**palette.highlights, key: value}

        self._config.save_user_settings()
        self._colors = self._build_cache()
