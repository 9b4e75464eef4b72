# model/annotation_model.py

import logging
from dataclasses import asdict, dataclass, replace
from typing import Dict, Iterable, List, Mapping, Optional

from settings.annotation_types import AnnotationTypes


logger = logging.getLogger(__name__)

STRANDS = ("+", "-")
INVALID_POSITIONS_MESSAGE = "Please enter valid start and end positions"


class AnnotationValidationError(ValueError):
    """
    Annotation oluşturma/düzenleme sırasında geçersiz girdi.
    Mesaj doğrudan kullanıcıya gösterilebilir.
    """


@dataclass(frozen=True)
class Annotation:
    """
    Sekans üzerinde etiketli, iplik yönlü bir aralık.

    start / end: 0-based, ikisi de inclusive.
    id: store tarafından atanır, asla tekrar kullanılmaz.
    """
    id: str
    start: int
    end: int
    label: str
    type: str
    color: str
    strand: str = "+"
    description: Optional[str] = None

    def is_valid_for(self, sequence_length: int) -> bool:
        return 0 <= self.start <= self.end < sequence_length

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


# Orijinal görüntüleyicideki örnek annotation'lar
SAMPLE_ANNOTATIONS: List[Dict[str, object]] = [
    {
        "start": 0,
        "end": 20,
        "label": "Gene A",
        "type": "gene",
        "description": "Important gene coding for protein A",
        "strand": "+",
    },
    {
        "start": 25,
        "end": 35,
        "label": "Promoter",
        "type": "promoter",
        "description": "Regulatory sequence",
        "strand": "+",
    },
    {
        "start": 40,
        "end": 60,
        "label": "Exon 1",
        "type": "exon",
        "description": "First exon of gene B",
        "strand": "-",
    },
]


class AnnotationStore:
    """
    Annotation kümesinin sahibi olan store (mutasyon arayüzü).

    Sorumluluklar:
    - id atamak (artan sayaç; silinen id'ler tekrar verilmez)
    - ekleme / düzenleme sırasında geometri doğrulaması
    - ekleme sırasını korumak (layout'taki eşitlik bozma kuralı buna dayanır)
    - boş label için "<Tip> <start>-<end>" varsayılanı
    """

    def __init__(
        self,
        sequence_length: int = 0,
        annotation_types: Optional[AnnotationTypes] = None,
        id_prefix: str = "annotation",
    ) -> None:
        self._annotations: List[Annotation] = []
        self._next_id: int = 0
        self._id_prefix = id_prefix
        self.sequence_length: int = max(0, sequence_length)
        self.annotation_types = annotation_types or AnnotationTypes()

    # ------------------------------------------------------------------
    # Okuma
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._annotations)

    def __iter__(self):
        return iter(list(self._annotations))

    def list(self) -> List[Annotation]:
        """
        Ekleme sırasıyla tüm annotation'ların kopyası.
        """
        return list(self._annotations)

    def get(self, annotation_id: str) -> Annotation:
        for annotation in self._annotations:
            if annotation.id == annotation_id:
                return annotation
        raise KeyError(f"Annotation '{annotation_id}' not found")

    def legend(self) -> List[Mapping[str, object]]:
        return self.annotation_types.legend(a.type for a in self._annotations)

    # ------------------------------------------------------------------
    # Mutasyon
    # ------------------------------------------------------------------

    def add(
        self,
        start: int,
        end: int,
        label: str = "",
        type: str = "gene",
        strand: str = "+",
        description: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Annotation:
        """
        Doğrulayıp yeni bir annotation ekler ve döner.
        Geçersiz girdide AnnotationValidationError fırlatır.
        """
        fields = self._build_fields(start, end, label, type, strand, description, color)
        annotation = Annotation(id=self._allocate_id(), **fields)
        self._annotations.append(annotation)
        logger.debug("Annotation added: %s (%s-%s)", annotation.id, annotation.start, annotation.end)
        return annotation

    def edit(
        self,
        annotation_id: str,
        start: int,
        end: int,
        label: str = "",
        type: str = "gene",
        strand: str = "+",
        description: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Annotation:
        """
        Var olan annotation'ı aynı id ve aynı sırada tutarak günceller.
        """
        index = self._index_of(annotation_id)
        fields = self._build_fields(start, end, label, type, strand, description, color)
        updated = replace(self._annotations[index], **fields)
        self._annotations[index] = updated
        return updated

    def delete(self, annotation_id: str) -> None:
        index = self._index_of(annotation_id)
        del self._annotations[index]

    def clear(self) -> None:
        """
        Tüm annotation'ları siler. id sayacı sıfırlanmaz.
        """
        self._annotations.clear()

    def reset(self, sequence_length: int) -> None:
        """
        Sekans değiştiğinde çağrılır: eski offset'ler anlamsız olduğu için
        tüm annotation'lar atılır.
        """
        if self._annotations:
            logger.debug("Sequence replaced, discarding %d annotations", len(self._annotations))
        self.clear()
        self.sequence_length = max(0, sequence_length)

    def load_samples(self) -> List[Annotation]:
        """
        Örnek annotation'larla mevcut kümeyi değiştirir.
        Sekansa sığmayan örnekler atlanır.
        """
        self.clear()
        return self.extend(SAMPLE_ANNOTATIONS)

    def extend(self, rows: Iterable[Mapping[str, object]]) -> List[Annotation]:
        """
        Dış kaynaktan (dosya, örnek veri) gelen kayıtları ekler.
        Geçersiz kayıtlar uyarı ile atlanır, diğerleri eklenmeye devam eder.
        """
        added: List[Annotation] = []
        for row in rows:
            try:
                added.append(
                    self.add(
                        start=row.get("start"),
                        end=row.get("end"),
                        label=str(row.get("label") or ""),
                        type=str(row.get("type") or "custom"),
                        strand=str(row.get("strand") or "+"),
                        description=row.get("description") or None,
                        color=row.get("color") or None,
                    )
                )
            except AnnotationValidationError as exc:
                logger.warning("Skipping annotation %r: %s", row.get("label"), exc)
        return added

    # ------------------------------------------------------------------
    # Yardımcılar
    # ------------------------------------------------------------------

    def _allocate_id(self) -> str:
        annotation_id = f"{self._id_prefix}-{self._next_id}"
        self._next_id += 1
        return annotation_id

    def _index_of(self, annotation_id: str) -> int:
        for idx, annotation in enumerate(self._annotations):
            if annotation.id == annotation_id:
                return idx
        raise KeyError(f"Annotation '{annotation_id}' not found")

    def _build_fields(
        self,
        start,
        end,
        label: str,
        type: str,
        strand: str,
        description: Optional[str],
        color: Optional[str],
    ) -> Dict[str, object]:
        start_pos = _parse_position(start)
        end_pos = _parse_position(end)

        if start_pos < 0 or end_pos >= self.sequence_length or start_pos > end_pos:
            raise AnnotationValidationError(INVALID_POSITIONS_MESSAGE)

        if strand not in STRANDS:
            raise AnnotationValidationError(f"Strand must be one of {STRANDS}, got {strand!r}")

        return {
            "start": start_pos,
            "end": end_pos,
            "label": label or f"{self.annotation_types.label_for(type)} {start_pos}-{end_pos}",
            "type": type,
            "color": color or self.annotation_types.color_for(type),
            "strand": strand,
            "description": description,
        }


def _parse_position(value) -> int:
    """
    Form girdisini int'e çevirir (örn. "12"). bool ve ondalıklı değerler reddedilir.
    """
    if isinstance(value, bool):
        raise AnnotationValidationError(INVALID_POSITIONS_MESSAGE)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise AnnotationValidationError(INVALID_POSITIONS_MESSAGE) from None
