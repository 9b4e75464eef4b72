import threading

from sequence_layout.layout_worker import LayoutWorker
from sequence_layout.sequence_layout_model import ViewState, compute_layout

from conftest import SAMPLE_1, make_annotation


def test_single_request_is_delivered() -> None:
    delivered = []
    view = ViewState(row_width=10, row_count=2, search_query="GC")
    annotations = [make_annotation("a", 0, 12)]

    with LayoutWorker(on_layout_ready=delivered.append) as worker:
        layout = worker.submit(SAMPLE_1, annotations, view).result(timeout=5)

    assert layout == compute_layout(SAMPLE_1, annotations, view)
    assert delivered == [layout]
    assert worker.latest == layout


def test_only_newest_request_is_delivered() -> None:
    delivered = []
    release = threading.Event()

    def blocker():
        release.wait(timeout=5)

    worker = LayoutWorker(on_layout_ready=delivered.append)
    try:
        # Occupy the worker thread so the next submissions queue up
        worker._executor.submit(blocker)
        stale = [worker.submit(SAMPLE_1, [], ViewState(window_start=i, row_width=5, row_count=1)) for i in range(3)]
        newest = worker.submit(SAMPLE_1, [], ViewState(window_start=40, row_width=5, row_count=1))
        release.set()

        assert newest.result(timeout=5).window_start == 40
        assert [f.result(timeout=5) for f in stale] == [None, None, None]
    finally:
        worker.shutdown()

    assert [layout.window_start for layout in delivered] == [40]
    assert worker.generation == 4


def test_annotation_snapshot_is_taken_at_submit() -> None:
    annotations = [make_annotation("a", 0, 3)]
    release = threading.Event()

    worker = LayoutWorker()
    try:
        worker._executor.submit(release.wait, 5)
        future = worker.submit("ATGCATGC", annotations, ViewState(row_width=8, row_count=1))
        annotations.append(make_annotation("b", 4, 6))
        release.set()
        layout = future.result(timeout=5)
    finally:
        worker.shutdown()

    assert [band.annotation_id for band in layout.rows[0].bands] == ["a"]
