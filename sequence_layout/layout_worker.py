# sequence_layout/layout_worker.py

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence

from model.annotation_model import Annotation

from .sequence_layout_model import SequenceLayout, ViewState, compute_layout


logger = logging.getLogger(__name__)


class LayoutWorker:
    """
    Büyük sekanslar için layout hesabını arka plandaki tek bir iş
    parçacığına taşır.

    - Her submit yeni bir nesil (generation) numarası alır
    - Sadece en son neslin sonucu callback'e iletilir; eskiler atılır
    - Sonuç tek parça teslim edilir (iki farklı girdinin satırları karışmaz)
    """

    def __init__(self, on_layout_ready: Optional[Callable[[SequenceLayout], None]] = None) -> None:
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="layout")
        self._lock = threading.Lock()
        self._generation: int = 0
        self._on_layout_ready = on_layout_ready
        self.latest: Optional[SequenceLayout] = None

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def submit(
        self,
        sequence: str,
        annotations: Sequence[Annotation],
        view_state: ViewState,
    ) -> "Future[Optional[SequenceLayout]]":
        """
        Girdinin anlık görüntüsünü alıp hesabı kuyruğa ekler.
        Future, sonuç eskimişse None ile tamamlanır.
        """
        snapshot: List[Annotation] = list(annotations)
        with self._lock:
            self._generation += 1
            generation = self._generation

        return self._executor.submit(self._run, generation, sequence, snapshot, view_state)

    def _run(
        self,
        generation: int,
        sequence: str,
        annotations: List[Annotation],
        view_state: ViewState,
    ) -> Optional[SequenceLayout]:
        if generation != self.generation:
            # Daha yeni bir istek geldi; hesaplamaya gerek yok
            logger.debug("Skipping stale layout request %d", generation)
            return None

        layout = compute_layout(sequence, annotations, view_state)

        with self._lock:
            if generation != self._generation:
                logger.debug("Discarding stale layout result %d", generation)
                return None
            self.latest = layout

        if self._on_layout_ready is not None:
            self._on_layout_ready(layout)
        return layout

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "LayoutWorker":
        return self

    def __exit__(self, *exc) -> None:
        self.shutdown()
