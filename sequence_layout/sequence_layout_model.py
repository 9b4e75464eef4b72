# sequence_layout/sequence_layout_model.py

import json
import logging
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from model.annotation_model import Annotation
from model.sequence_search import find_matches, is_match_position

from .annotation_lane_model import AnnotationFragment, allocate_lanes, lane_count, valid_annotations
from .row_partition_model import Row, clamp_window_start, partition_rows


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewState:
    """
    Çağıranın kontrol ettiği görünüm parametreleri.
    """
    window_start: int = 0
    row_width: int = 20
    row_count: int = 15
    search_query: str = ""

    def __post_init__(self) -> None:
        if self.row_width <= 0:
            raise ValueError(f"row_width must be positive, got {self.row_width}")
        if self.row_count < 0:
            raise ValueError(f"row_count must not be negative, got {self.row_count}")

    @property
    def window_length(self) -> int:
        return self.row_width * self.row_count


@dataclass(frozen=True)
class LayoutSymbol:
    """
    Tek bir sembolün render verisi.
    column: satır içi 0-based sütun.
    annotation_ids: bu offset'i kapsayan annotation id'leri (ekleme sırasıyla).
    """
    offset: int
    column: int
    symbol: str
    is_match: bool
    annotation_ids: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AnnotationBand:
    """
    Şerit atanmış parça + renderer'ın ihtiyaç duyduğu kopyalanmış alanlar.
    relative_start / relative_end satır içi sütunlar (inclusive).
    """
    annotation_id: str
    row_start_offset: int
    clipped_start: int
    clipped_end: int
    lane: int
    relative_start: int
    relative_end: int
    start: int
    end: int
    label: str
    type: str
    color: str
    strand: str
    description: Optional[str] = None

    @property
    def continues_left(self) -> bool:
        return self.start < self.clipped_start

    @property
    def continues_right(self) -> bool:
        return self.end > self.clipped_end


@dataclass(frozen=True)
class LayoutRow:
    start_offset: int
    end_offset: int
    lane_count: int
    symbols: List[LayoutSymbol] = field(default_factory=list)
    bands: List[AnnotationBand] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(s.symbol for s in self.symbols)


@dataclass(frozen=True)
class SequenceLayout:
    """
    Layout Assembler çıktısı: renderer ile tek arayüz.
    Geometri (piksel) içermez; sadece ilkel alanlar, JSON'a çevrilebilir.
    """
    sequence_length: int
    window_start: int
    window_end: int           # exclusive
    row_width: int
    search_query: str
    matches: List[int] = field(default_factory=list)
    rows: List[LayoutRow] = field(default_factory=list)

    @property
    def max_lane_count(self) -> int:
        return max((row.lane_count for row in self.rows), default=0)

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)

    def to_json(self, **kwargs) -> str:
        return json.dumps(self.to_dict(), **kwargs)


# ----------------------------------------------------------------------
# Assembler
# ----------------------------------------------------------------------

def _build_band(fragment: AnnotationFragment, annotation: Annotation) -> AnnotationBand:
    return AnnotationBand(
        annotation_id=fragment.annotation_id,
        row_start_offset=fragment.row_start_offset,
        clipped_start=fragment.clipped_start,
        clipped_end=fragment.clipped_end,
        lane=fragment.lane,
        relative_start=fragment.clipped_start - fragment.row_start_offset,
        relative_end=fragment.clipped_end - fragment.row_start_offset,
        start=annotation.start,
        end=annotation.end,
        label=annotation.label,
        type=annotation.type,
        color=annotation.color,
        strand=annotation.strand,
        description=annotation.description,
    )


def assemble_row(
    row: Row,
    fragments: Sequence[AnnotationFragment],
    annotations_by_id: Dict[str, Annotation],
    insertion_order: Dict[str, int],
    matches: Sequence[int],
    query_length: int,
) -> LayoutRow:
    """
    Satır sembollerini match bayrağı ve kapsayan annotation id'leri ile
    etiketler, parçaları band'e çevirir.
    """
    # Sembol başına id listesi ekleme sırasına göre olmalı
    covering = sorted(fragments, key=lambda f: insertion_order[f.annotation_id])

    symbols: List[LayoutSymbol] = []
    for column, ch in enumerate(row.symbols):
        offset = row.start_offset + column
        ids = tuple(
            f.annotation_id for f in covering if f.clipped_start <= offset <= f.clipped_end
        )
        symbols.append(
            LayoutSymbol(
                offset=offset,
                column=column,
                symbol=ch,
                is_match=is_match_position(matches, query_length, offset),
                annotation_ids=ids,
            )
        )

    bands = [_build_band(f, annotations_by_id[f.annotation_id]) for f in fragments]

    return LayoutRow(
        start_offset=row.start_offset,
        end_offset=row.end_offset,
        lane_count=lane_count(fragments),
        symbols=symbols,
        bands=bands,
    )


def compute_layout(
    sequence: str,
    annotations: Sequence[Annotation],
    view_state: ViewState,
) -> SequenceLayout:
    """
    Sekans + görünüm durumu + annotation kümesi → render edilebilir layout.

    Saf fonksiyon: girdileri değiştirmez, aramalar arasında durum tutmaz.
    Her çağrı baştan hesaplar.
    """
    length = len(sequence)
    window_start = clamp_window_start(view_state.window_start, length)
    if window_start != view_state.window_start:
        logger.debug("Window start %d clamped to %d", view_state.window_start, window_start)

    rows = partition_rows(sequence, window_start, view_state.row_width, view_state.row_count)
    matches = find_matches(sequence, view_state.search_query)
    candidates = valid_annotations(annotations, length)
    fragments_per_row = allocate_lanes(rows, candidates, length)

    annotations_by_id = {a.id: a for a in candidates}
    insertion_order = {a.id: idx for idx, a in enumerate(candidates)}
    query_length = len(view_state.search_query)

    layout_rows = [
        assemble_row(row, fragments, annotations_by_id, insertion_order, matches, query_length)
        for row, fragments in zip(rows, fragments_per_row)
    ]

    window_end = rows[-1].end_offset + 1 if rows else window_start
    return SequenceLayout(
        sequence_length=length,
        window_start=window_start,
        window_end=window_end,
        row_width=view_state.row_width,
        search_query=view_state.search_query,
        matches=matches,
        rows=layout_rows,
    )
