"""
Abstract interfaces for sequence data repositories.

Repositories encapsulate read-only data access for the sequence_layout
package, keeping the layout engine decoupled from concrete storage
implementations. Annotation rows are returned as plain mappings; turning them
into validated annotations is the job of ``model.annotation_model.AnnotationStore``.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Mapping, Protocol


class SequenceRecord(Protocol):
    id: str
    description: str
    sequence: str


class AbstractSequenceRepository(ABC):
    """Base class for all sequence repositories."""

    @abstractmethod
    def get_sequence_by_id(self, sequence_id: str) -> SequenceRecord:
        """Fetch a single sequence by its identifier."""

    @abstractmethod
    def list_sequences(self) -> Iterable[SequenceRecord]:
        """Return an iterable of all sequences available in the repository."""

    @abstractmethod
    def get_annotations(self, sequence_id: str) -> Iterable[Mapping[str, object]]:
        """Return raw annotation rows attached to a sequence."""

    def get_annotations_in_region(self, sequence_id: str, start: int, end: int) -> Iterable[Mapping[str, object]]:
        """Return annotation rows overlapping the inclusive ``[start, end]`` region."""

        filtered = []
        for row in self.get_annotations(sequence_id):
            try:
                a_start = int(row.get("start", 0))
                a_end = int(row.get("end", 0))
            except (TypeError, ValueError):
                continue
            if a_start <= end and a_end >= start:
                filtered.append(row)
        return filtered
