# model/sequence_statistics.py

from dataclasses import dataclass, field
from typing import Dict, Iterable


NUCLEOTIDES = ("A", "T", "G", "C")
GC_SYMBOLS = ("G", "C")


@dataclass(frozen=True)
class SequenceStatistics:
    """
    Sekansın kompozisyon özeti.

    - counts: sadece tanınan alfabe sembolleri (A/T/G/C) için sayımlar
    - total: tanınan sembollerin toplamı (bilinmeyen karakterler hariç)
    - gc_content: (G + C) / total * 100, total == 0 ise 0.0
    """
    counts: Dict[str, int] = field(default_factory=dict)
    total: int = 0
    gc_content: float = 0.0

    def count(self, symbol: str) -> int:
        return self.counts.get(symbol.upper(), 0)

    def percentage(self, symbol: str) -> float:
        """
        Tek bir sembolün yüzdesi. total == 0 ise 0.0 (NaN yok).
        """
        if self.total == 0:
            return 0.0
        return self.count(symbol) / self.total * 100.0

    def to_dict(self) -> Dict[str, object]:
        return {
            "counts": dict(self.counts),
            "total": self.total,
            "gc_content": self.gc_content,
            "percentages": {s: self.percentage(s) for s in NUCLEOTIDES},
        }


def compute_statistics(
    sequence: str,
    alphabet: Iterable[str] = NUCLEOTIDES,
    gc_symbols: Iterable[str] = GC_SYMBOLS,
) -> SequenceStatistics:
    """
    Sekansı tek geçişte tarar, sembolleri sayar ve GC yüzdesini hesaplar.
    Alfabe dışı karakterler sessizce atlanır.
    """
    counts: Dict[str, int] = {symbol: 0 for symbol in alphabet}

    for ch in sequence.upper():
        if ch in counts:
            counts[ch] += 1

    total = sum(counts.values())
    if total == 0:
        # Boş ya da tamamen tanınmayan sekans → tanımlı sonuç 0
        return SequenceStatistics(counts=counts, total=0, gc_content=0.0)

    gc_count = sum(counts.get(s, 0) for s in gc_symbols)
    return SequenceStatistics(
        counts=counts,
        total=total,
        gc_content=gc_count / total * 100.0,
    )
