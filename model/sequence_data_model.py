# model/sequence_data_model.py

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from Bio import SeqIO

from model.annotation_model import AnnotationStore
from model.sequence_search import find_matches, fold_case
from model.sequence_statistics import SequenceStatistics, compute_statistics
from sequence_layout.sequence_layout_model import SequenceLayout, ViewState, compute_layout
from settings.annotation_types import AnnotationTypes


logger = logging.getLogger(__name__)

_NON_NUCLEOTIDE = re.compile(r"[^ATGC]")

SAMPLE_SEQUENCES: Dict[str, str] = {
    "Sample 1": "ATGCGATCGTAGCTAGCATGCTAGCTAGCATGCTAGCTAGCATGCTAGCATGCTAGCTAGCATGCTAGCTAGCATGC",
    "Sample 2": "GGCCTTAAGGATCCGGAATTCCTGCAGCCCGGGGGATCCACTAGTTCTAGAGCGGCCGCCACCGCGGTGGAGCTC",
    "Sample 3": "AAAAAAAAAAAAAAAAAAAATTTTTTTTTTTTTTTTTTGGGGGGGGGGGGGGGGGGCCCCCCCCCCCCCCCCCC",
}


def canonicalize_sequence(raw: str) -> str:
    """
    Girdi büyük/küçük harf duyarsız; kanonik hali büyük harf.
    Alfabe dışı karakterler korunur (istatistikte sayılmazlar).
    """
    return fold_case(raw)


def sanitize_sequence(raw: str) -> str:
    """
    Büyük harfe çevirir ve A/T/G/C dışındaki her şeyi atar.
    """
    return _NON_NUCLEOTIDE.sub("", fold_case(raw))


class SequenceDataModel:
    """
    Aktif sekansı ve ona bağlı annotation kümesini saklayan veri modeli.

    Kural: sekans değiştiğinde tüm annotation'lar silinir ve pencere
    konumu 0'a döner; eski offset'ler yeni içerik için anlamsızdır.
    """

    def __init__(
        self,
        sequence: str = "",
        header: str = "",
        annotation_types: Optional[AnnotationTypes] = None,
    ) -> None:
        self.header: str = header
        self._sequence: str = canonicalize_sequence(sequence)
        self.window_start: int = 0
        self.annotations = AnnotationStore(
            sequence_length=len(self._sequence),
            annotation_types=annotation_types,
        )

    # ------------------------------------------------------------------
    # Sekans yönetimi
    # ------------------------------------------------------------------

    @property
    def sequence(self) -> str:
        return self._sequence

    @property
    def length(self) -> int:
        return len(self._sequence)

    def set_sequence(self, raw: str, header: str = "", sanitize: bool = False) -> str:
        """
        Sekansı değiştirir, annotation'ları temizler, pencereyi başa alır.
        Kanonik (ya da temizlenmiş) sekansı döner.
        """
        self._sequence = sanitize_sequence(raw) if sanitize else canonicalize_sequence(raw)
        self.header = header
        self.window_start = 0
        self.annotations.reset(len(self._sequence))
        return self._sequence

    def load_sample(self, name: str) -> str:
        """
        Gömülü örnek sekanslardan birini yükler.
        Bilinmeyen isimde KeyError fırlatır.
        """
        return self.set_sequence(SAMPLE_SEQUENCES[name], header=name)

    def load_fasta(self, file_path: str, record_index: int = 0) -> List[Tuple[str, str]]:
        """
        FASTA dosyasını Biopython ile okur, record_index'teki kaydı aktif
        sekans yapar ve tüm başlık-sekans çiftlerini döner.
        """
        path = Path(file_path)
        records = [(record.description, str(record.seq)) for record in SeqIO.parse(str(path), "fasta")]
        if not records:
            raise ValueError(f"No FASTA records found in {path}")

        header, sequence = records[record_index]
        logger.info("Loaded %d record(s) from %s, using '%s'", len(records), path.name, header)
        self.set_sequence(sequence, header=header)
        return records

    # ------------------------------------------------------------------
    # Türetilmiş değerler
    # ------------------------------------------------------------------

    def statistics(self) -> SequenceStatistics:
        return compute_statistics(self._sequence)

    def find_matches(self, query: str) -> List[int]:
        return find_matches(self._sequence, query)

    def compute_layout(self, view_state: Optional[ViewState] = None) -> SequenceLayout:
        """
        Mevcut sekans + annotation'lar için layout'u baştan hesaplar.

        view_state verilmezse pencere modelin window_start'ından başlar.
        Kullanılan (clamp edilmiş) başlangıç window_start'a yazılır.
        """
        if view_state is None:
            view_state = ViewState(window_start=self.window_start)
        layout = compute_layout(self._sequence, self.annotations.list(), view_state)
        self.window_start = layout.window_start
        return layout
