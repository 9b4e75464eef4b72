# sequence_layout/row_partition_model.py

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Row:
    """
    Pencerenin tek bir satırı.
    start_offset: satırın ilk sembolünün mutlak (0-based) konumu.
    """
    start_offset: int
    symbols: str

    @property
    def length(self) -> int:
        return len(self.symbols)

    @property
    def end_offset(self) -> int:
        """
        Satırın son sembolünün mutlak konumu (inclusive).
        """
        return self.start_offset + len(self.symbols) - 1


def clamp_window_start(window_start: int, sequence_length: int) -> int:
    """
    window_start'ı [0, sequence_length) aralığına clamp eder.
    Boş sekansta 0 döner.
    """
    if sequence_length <= 0:
        return 0
    return max(0, min(window_start, sequence_length - 1))


def partition_rows(
    sequence: str,
    window_start: int,
    row_width: int,
    row_count: int,
) -> List[Row]:
    """
    [window_start, min(len, window_start + row_width * row_count)) aralığını
    row_width genişliğinde satırlara böler. Son satır daha kısa olabilir.
    """
    if row_width <= 0:
        raise ValueError(f"row_width must be positive, got {row_width}")
    if row_count <= 0 or not sequence:
        return []

    start = clamp_window_start(window_start, len(sequence))
    end = min(len(sequence), start + row_width * row_count)

    return [
        Row(start_offset=offset, symbols=sequence[offset:min(offset + row_width, end)])
        for offset in range(start, end, row_width)
    ]
