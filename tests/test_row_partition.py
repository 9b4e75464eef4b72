import pytest

from sequence_layout.row_partition_model import clamp_window_start, partition_rows

from conftest import SAMPLE_1


def test_two_full_rows() -> None:
    rows = partition_rows("ATGCATGC", 0, 4, 10)
    assert [(r.start_offset, r.end_offset, r.symbols) for r in rows] == [
        (0, 3, "ATGC"),
        (4, 7, "ATGC"),
    ]


def test_last_row_may_be_short() -> None:
    rows = partition_rows("ATGCATGCA", 0, 4, 10)
    assert [r.symbols for r in rows] == ["ATGC", "ATGC", "A"]


def test_row_count_limits_window() -> None:
    rows = partition_rows(SAMPLE_1, 5, 10, 2)
    assert [r.start_offset for r in rows] == [5, 15]
    assert "".join(r.symbols for r in rows) == SAMPLE_1[5:25]


@pytest.mark.parametrize("start,width,count", [(0, 20, 15), (3, 7, 4), (70, 20, 3), (76, 1, 5), (0, 100, 1)])
def test_rows_concatenate_to_window_slice(start, width, count) -> None:
    rows = partition_rows(SAMPLE_1, start, width, count)
    end = min(len(SAMPLE_1), start + width * count)
    assert "".join(r.symbols for r in rows) == SAMPLE_1[start:end]
    assert all(r.length == width for r in rows[:-1])
    assert all(b.start_offset == a.start_offset + width for a, b in zip(rows, rows[1:]))


def test_window_start_is_clamped() -> None:
    assert clamp_window_start(-5, 10) == 0
    assert clamp_window_start(50, 10) == 9
    assert clamp_window_start(3, 0) == 0
    rows = partition_rows("ATGCATGC", 100, 4, 2)
    assert [(r.start_offset, r.symbols) for r in rows] == [(7, "C")]


def test_empty_inputs_give_no_rows() -> None:
    assert partition_rows("", 0, 4, 3) == []
    assert partition_rows("ATGC", 0, 4, 0) == []


def test_row_width_must_be_positive() -> None:
    with pytest.raises(ValueError):
        partition_rows("ATGC", 0, 0, 1)
