# navigation_model/navigation_model.py

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from sequence_layout.sequence_layout_model import ViewState


@dataclass
class NavigationLayout:
    """
    Navigasyon kontrollerinin (Previous / Next / konum etiketi / match
    kısayolları) ihtiyaç duyduğu hesaplanmış bilgi.
    """
    sequence_length: int
    position: int               # pencerenin ilk nt'si (0-based)
    first_pos: int              # etikette görünen ilk nt (1-based)
    last_pos: int               # etikette görünen son nt (1-based)
    previous_position: int
    next_position: int
    can_go_previous: bool
    can_go_next: bool
    label: str
    match_shortcuts: List[int] = field(default_factory=list)   # 0-based match offset'leri
    remaining_matches: int = 0


class NavigationModel:
    """
    Navigasyon için Model katmanı.

    Sorumluluklar:
    - sequence_length, row_width, row_count, page_rows bilgisini tutmak
    - Previous / Next hedef konumlarını hesaplamak
        * adım = row_width * page_rows
    - Görünen aralık etiketini üretmek ("Position: a - b of n")
    - Match'e atlama konumunu hesaplamak (match'ten bir satır önce)
    """

    def __init__(self, page_rows: int = 5, match_shortcut_limit: int = 10) -> None:
        self.sequence_length: int = 0
        self.row_width: int = 20
        self.row_count: int = 15
        self.page_rows: int = max(1, page_rows)
        self.match_shortcut_limit: int = max(0, match_shortcut_limit)

    # ------------------------------------------------------------------
    # State güncelleme
    # ------------------------------------------------------------------

    def set_state(self, *, sequence_length: int, row_width: int, row_count: int) -> None:
        self.sequence_length = max(sequence_length, 0)
        self.row_width = max(row_width, 1)
        self.row_count = max(row_count, 0)

    def set_view_state(self, sequence_length: int, view_state: ViewState) -> None:
        self.set_state(
            sequence_length=sequence_length,
            row_width=view_state.row_width,
            row_count=view_state.row_count,
        )

    # ------------------------------------------------------------------
    # Konum hesapları
    # ------------------------------------------------------------------

    @property
    def page_step(self) -> int:
        return self.row_width * self.page_rows

    @property
    def window_length(self) -> int:
        return self.row_width * self.row_count

    def clamp_position(self, position: int) -> int:
        if self.sequence_length <= 0:
            return 0
        return max(0, min(position, self.sequence_length - 1))

    def previous_position(self, position: int) -> int:
        return max(0, position - self.page_step)

    def next_position(self, position: int) -> int:
        if self.sequence_length <= 0:
            return 0
        return min(self.sequence_length - 1, position + self.page_step)

    def can_go_previous(self, position: int) -> bool:
        return position != 0

    def can_go_next(self, position: int) -> bool:
        return position + self.window_length < self.sequence_length

    def match_jump_position(self, match_offset: int) -> int:
        """
        Match'e tıklanınca pencere bir satır önceden başlar.
        """
        return max(0, match_offset - self.row_width)

    def range_label(self, position: int) -> str:
        last_pos = min(position + self.window_length, self.sequence_length)
        return f"Position: {position + 1} - {last_pos} of {self.sequence_length}"

    # ------------------------------------------------------------------
    # Layout hesaplama
    # ------------------------------------------------------------------

    def compute_layout(
        self,
        position: int,
        matches: Optional[Sequence[int]] = None,
    ) -> NavigationLayout:
        """
        Şu anki state'e göre navigasyon layout'unu hesaplar.
        position clamp edilir; hata fırlatılmaz.
        """
        position = self.clamp_position(position)
        matches = list(matches or [])
        shortcuts = matches[: self.match_shortcut_limit]

        return NavigationLayout(
            sequence_length=self.sequence_length,
            position=position,
            first_pos=position + 1,
            last_pos=min(position + self.window_length, self.sequence_length),
            previous_position=self.previous_position(position),
            next_position=self.next_position(position),
            can_go_previous=self.can_go_previous(position),
            can_go_next=self.can_go_next(position),
            label=self.range_label(position),
            match_shortcuts=shortcuts,
            remaining_matches=len(matches) - len(shortcuts),
        )
