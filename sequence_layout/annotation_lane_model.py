# sequence_layout/annotation_lane_model.py

import logging
from dataclasses import dataclass
from typing import List, Sequence, Set

from model.annotation_model import Annotation

from .row_partition_model import Row


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnnotationFragment:
    """
    Bir annotation'ın tek satıra düşen, satır sınırlarına kırpılmış parçası.
    clipped_start / clipped_end mutlak ve inclusive.
    lane: satır içinde yerel dikey şerit indeksi (0 en üst).
    """
    annotation_id: str
    row_start_offset: int
    clipped_start: int
    clipped_end: int
    lane: int


def valid_annotations(annotations: Sequence[Annotation], sequence_length: int) -> List[Annotation]:
    """
    Geometrisi geçersiz kayıtları (start > end, negatif, sekans dışı) ve
    daha önce görülmüş id'leri atlar. Layout motoru bunlar için hata
    fırlatmaz.
    """
    valid: List[Annotation] = []
    seen: Set[str] = set()
    for annotation in annotations:
        if annotation.id in seen:
            logger.debug("Skipping duplicate annotation id %s", annotation.id)
        elif annotation.is_valid_for(sequence_length):
            seen.add(annotation.id)
            valid.append(annotation)
        else:
            logger.debug(
                "Skipping invalid annotation %s (%s-%s) for length %d",
                annotation.id, annotation.start, annotation.end, sequence_length,
            )
    return valid


def assign_lanes(row: Row, annotations: Sequence[Annotation]) -> List[AnnotationFragment]:
    """
    Tek satır için şerit ataması.

    1. Satırla kesişen annotation'ları seç
    2. Satıra kırp
    3. clipped_start'a göre sırala (eşitlikte ekleme sırası; sort stabil)
    4. Greedy: son parçası bu parçadan önce biten en düşük indeksli şerit,
       yoksa yeni şerit

    Açılan şerit sayısı, satırdaki herhangi bir noktayı aynı anda kapsayan
    maksimum parça sayısına eşittir.
    """
    if row.length == 0:
        return []

    row_start = row.start_offset
    row_end = row.end_offset

    clipped = [
        (annotation.id, max(annotation.start, row_start), min(annotation.end, row_end))
        for annotation in annotations
        if annotation.start <= row_end and annotation.end >= row_start
    ]
    clipped.sort(key=lambda item: item[1])

    # Her şeridin son yerleştirilen parçasının clipped_end'i
    lane_ends: List[int] = []
    fragments: List[AnnotationFragment] = []

    for annotation_id, clipped_start, clipped_end in clipped:
        for lane, last_end in enumerate(lane_ends):
            if last_end < clipped_start:
                lane_ends[lane] = clipped_end
                break
        else:
            lane = len(lane_ends)
            lane_ends.append(clipped_end)

        fragments.append(
            AnnotationFragment(
                annotation_id=annotation_id,
                row_start_offset=row_start,
                clipped_start=clipped_start,
                clipped_end=clipped_end,
                lane=lane,
            )
        )

    return fragments


def allocate_lanes(
    rows: Sequence[Row],
    annotations: Sequence[Annotation],
    sequence_length: int,
) -> List[List[AnnotationFragment]]:
    """
    Her satır için bağımsız şerit ataması yapar.
    Aynı annotation farklı satırlarda farklı şeritlerde olabilir.
    """
    candidates = valid_annotations(annotations, sequence_length)
    if rows and candidates:
        # Pencere dışındaki annotation'ları baştan ele
        window_start = rows[0].start_offset
        window_end = rows[-1].end_offset
        candidates = [a for a in candidates if a.start <= window_end and a.end >= window_start]

    return [assign_lanes(row, candidates) for row in rows]


def lane_count(fragments: Sequence[AnnotationFragment]) -> int:
    return max((f.lane for f in fragments), default=-1) + 1
