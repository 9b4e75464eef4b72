"""
Immutable accessors for annotation type presets.

The :class:`AnnotationTypes` helper exposes read-only access to the annotation
type catalog loaded by :class:`settings.config.AppConfig`. Each type is
returned as a mapping proxy to prevent accidental mutation at call sites.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional

from .config import AnnotationTypeSettings, AppConfig


FALLBACK_TYPE = "custom"


class AnnotationTypes:
    """Provide immutable annotation type presets from ``AppConfig``."""

    def __init__(self, config: Optional[AppConfig] = None):
        self._config = config or AppConfig()

    @staticmethod
    def _to_mapping(key: str, settings: AnnotationTypeSettings) -> Mapping[str, object]:
        return MappingProxyType(
            {
                "key": key,
                "label": settings.label,
                "color": settings.color,
            }
        )

    def keys(self) -> List[str]:
        return list(self._config.annotation_types.keys())

    def is_known(self, type_key: str) -> bool:
        return type_key in self._config.annotation_types

    def get(self, type_key: str) -> Mapping[str, object]:
        """Return the preset for ``type_key``, falling back to the custom type."""

        types = self._config.annotation_types
        if type_key in types:
            return self._to_mapping(type_key, types[type_key])
        if FALLBACK_TYPE in types:
            return self._to_mapping(FALLBACK_TYPE, types[FALLBACK_TYPE])
        return MappingProxyType({"key": type_key, "label": type_key.title(), "color": self._config.color_palette.fallback})

    def label_for(self, type_key: str) -> str:
        return str(self.get(type_key)["label"])

    def color_for(self, type_key: str) -> str:
        return str(self.get(type_key)["color"])

    def legend(self, used_types: Iterable[str]) -> List[Mapping[str, object]]:
        """Return the presets of the types in use, in catalog order.

        Unknown types are appended after the catalog entries in first-seen order.
        """

        seen = list(dict.fromkeys(used_types))
        ordered = [key for key in self.keys() if key in seen]
        ordered.extend(key for key in seen if not self.is_known(key))
        legend: List[Mapping[str, object]] = []
        for key in ordered:
            preset = self.get(key)
            label = preset["label"] if self.is_known(key) else key
            legend.append(MappingProxyType({"key": key, "label": label, "color": preset["color"]}))
        return legend
