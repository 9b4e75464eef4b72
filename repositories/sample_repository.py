"""
Repository serving the built-in sample sequences.

Every sample sequence is exposed under its display name ("Sample 1" ...).
The sample annotations are attached to the first sample only, matching the
demo data shipped with the viewer.
"""
from __future__ import annotations

from typing import Iterable, List, Mapping

from model.annotation_model import SAMPLE_ANNOTATIONS
from model.sequence_data_model import SAMPLE_SEQUENCES

from .base_repository import AbstractSequenceRepository, SequenceRecord
from .file_based_repository import FileSequenceRecord


ANNOTATED_SAMPLE = "Sample 1"


class SampleRepository(AbstractSequenceRepository):
    """Read-only repository over the bundled demo data."""

    def __init__(self) -> None:
        self._records: List[FileSequenceRecord] = [
            FileSequenceRecord(name, sequence) for name, sequence in SAMPLE_SEQUENCES.items()
        ]

    def get_sequence_by_id(self, sequence_id: str) -> SequenceRecord:
        for record in self._records:
            if record.id == sequence_id:
                return record
        raise KeyError(f"Sequence '{sequence_id}' not found")

    def list_sequences(self) -> Iterable[SequenceRecord]:
        return list(self._records)

    def get_annotations(self, sequence_id: str) -> Iterable[Mapping[str, object]]:
        self.get_sequence_by_id(sequence_id)
        if sequence_id != ANNOTATED_SAMPLE:
            return []
        return [dict(row, sequence_id=sequence_id) for row in SAMPLE_ANNOTATIONS]
