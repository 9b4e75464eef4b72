import json

import pytest

from settings.annotation_types import AnnotationTypes
from settings.color_palette import ColorPalette
from settings.config import AppConfig


def test_bundled_defaults(config) -> None:
    assert config.viewer.row_width == 20
    assert config.viewer.row_count == 15
    assert config.viewer.row_width_choices == [10, 20, 30, 50]
    assert config.color_palette.bases["G"] == "#45B7D1"
    assert config.annotation_types["restriction"].label == "Restriction Site"
    assert config.data_source.type == "sample"


def test_user_file_overrides_defaults(tmp_path) -> None:
    user_path = tmp_path / "config.json"
    user_path.write_text(json.dumps({"viewer": {"row_width": 30}}), encoding="utf-8")

    config = AppConfig(user_config_path=user_path)

    assert config.viewer.row_width == 30
    assert config.viewer.row_count == 15


def test_environment_overrides_user_file(tmp_path, monkeypatch) -> None:
    user_path = tmp_path / "config.json"
    user_path.write_text(json.dumps({"viewer": {"row_width": 30}}), encoding="utf-8")
    monkeypatch.setenv("SEQUENCE_LAYOUT_VIEWER__ROW_WIDTH", "50")

    config = AppConfig(user_config_path=user_path)

    assert config.viewer.row_width == 50


def test_invalid_json_raises_value_error(tmp_path) -> None:
    user_path = tmp_path / "config.json"
    user_path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid JSON"):
        AppConfig(user_config_path=user_path)


def test_unsupported_data_source_rejected(tmp_path) -> None:
    user_path = tmp_path / "config.json"
    user_path.write_text(json.dumps({"data_source": {"type": "database"}}), encoding="utf-8")
    with pytest.raises(ValueError):
        AppConfig(user_config_path=user_path)


def test_palette_colors_and_persistence(config) -> None:
    palette = ColorPalette(config)
    assert palette.get_base_color("a") == "#FF6B6B"
    assert palette.get_base_color("N") == "#808080"
    assert palette.get_match_color() == "#FFEB3B"

    palette.set_custom_color("N", "#111111")
    palette.set_custom_color("selection", "#222222")

    assert palette.get_base_color("N") == "#111111"
    assert palette.get_feature_color("selection") == "#222222"
    saved = json.loads(config.user_config_path.read_text(encoding="utf-8"))
    assert saved["color_palette"]["bases"]["N"] == "#111111"
    assert "user_config_path" not in saved

    reloaded = AppConfig(user_config_path=config.user_config_path)
    assert ColorPalette(reloaded).get_feature_color("selection") == "#222222"


def test_annotation_type_presets_are_read_only(annotation_types) -> None:
    preset = annotation_types.get("promoter")
    assert preset["label"] == "Promoter"
    with pytest.raises(TypeError):
        preset["label"] = "changed"
    assert annotation_types.get("unknown")["key"] == "custom"


def test_legend_appends_unknown_types(annotation_types) -> None:
    legend = annotation_types.legend(["mystery", "utr", "gene"])
    assert [entry["key"] for entry in legend] == ["gene", "utr", "mystery"]
    assert legend[2]["label"] == "mystery"


def test_annotation_types_without_custom_entry(config) -> None:
    config.annotation_types = {}
    types = AnnotationTypes(config)
    assert types.color_for("gene") == config.color_palette.fallback
    assert types.label_for("gene") == "Gene"
