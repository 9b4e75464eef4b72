"""Shared fixtures for the sequence layout test suite."""

import os

import pytest

from model.annotation_model import Annotation, AnnotationStore
from settings.annotation_types import AnnotationTypes
from settings.config import AppConfig


SAMPLE_1 = "ATGCGATCGTAGCTAGCATGCTAGCTAGCATGCTAGCTAGCATGCTAGCATGCTAGCTAGCATGCTAGCTAGCATGC"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep developer environment overrides out of the tests."""
    for key in list(os.environ):
        if key.upper().startswith("SEQUENCE_LAYOUT_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def config(tmp_path):
    """AppConfig that never touches the real user config file."""
    return AppConfig(user_config_path=tmp_path / "config.json")


@pytest.fixture
def annotation_types(config):
    return AnnotationTypes(config)


@pytest.fixture
def store(annotation_types):
    return AnnotationStore(sequence_length=len(SAMPLE_1), annotation_types=annotation_types)


def make_annotation(annotation_id, start, end, **overrides):
    fields = {
        "id": annotation_id,
        "start": start,
        "end": end,
        "label": f"Feature {annotation_id}",
        "type": "gene",
        "color": "#4CAF50",
        "strand": "+",
        "description": None,
    }
    fields.update(overrides)
    return Annotation(**fields)
