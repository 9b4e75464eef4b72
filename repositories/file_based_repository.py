"""
File-backed repository implementation.

This repository reads sequence data from FASTA files and annotation rows from
tab-separated files with the columns ``sequence_id, start, end, label, type,
strand, description`` (``color`` optional). It intentionally keeps parsing
light-weight; unreadable rows are skipped with a warning.
"""
from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

from Bio import SeqIO

from .base_repository import AbstractSequenceRepository, SequenceRecord


logger = logging.getLogger(__name__)

ANNOTATION_COLUMNS = ("sequence_id", "start", "end", "label", "type", "strand", "description", "color")


class FileSequenceRecord:
    def __init__(self, record_id: str, sequence: str, description: str = ""):
        self.id = record_id
        self.sequence = sequence
        self.description = description or record_id


class FileBasedRepository(AbstractSequenceRepository):
    """Repository that loads data from local files."""

    def __init__(self, fasta_path: Path, annotation_path: Optional[Path] = None):
        self.fasta_path = Path(fasta_path)
        self.annotation_path = Path(annotation_path) if annotation_path else None
        self._cache: List[FileSequenceRecord] = []
        self._load_sequences()

    def _load_sequences(self) -> None:
        if not self.fasta_path.is_file():
            raise FileNotFoundError(f"FASTA path not found: {self.fasta_path}")

        self._cache = [
            FileSequenceRecord(record.id, str(record.seq), record.description)
            for record in SeqIO.parse(str(self.fasta_path), "fasta")
        ]
        logger.info("Loaded %d sequence(s) from %s", len(self._cache), self.fasta_path.name)

    def _load_annotations(self) -> List[Dict[str, object]]:
        if not self.annotation_path or not self.annotation_path.exists():
            return []

        rows: List[Dict[str, object]] = []
        with self.annotation_path.open("r", encoding="utf-8", newline="") as handle:
            reader = csv.DictReader(handle, delimiter="\t")
            for line_no, row in enumerate(reader, start=2):
                try:
                    parsed: Dict[str, object] = {key: (row.get(key) or "").strip() for key in ANNOTATION_COLUMNS}
                    parsed["start"] = int(parsed["start"])
                    parsed["end"] = int(parsed["end"])
                except ValueError:
                    logger.warning("Skipping unreadable annotation row %d in %s", line_no, self.annotation_path.name)
                    continue
                rows.append(parsed)
        return rows

    def get_sequence_by_id(self, sequence_id: str) -> SequenceRecord:
        for record in self._cache:
            if record.id == sequence_id:
                return record
        raise KeyError(f"Sequence '{sequence_id}' not found")

    def list_sequences(self) -> Iterable[SequenceRecord]:
        return list(self._cache)

    def get_annotations(self, sequence_id: str) -> Iterable[Mapping[str, object]]:
        return [row for row in self._load_annotations() if row.get("sequence_id") == sequence_id]
