import pytest

from model.sequence_data_model import SAMPLE_SEQUENCES, SequenceDataModel, canonicalize_sequence, sanitize_sequence
from sequence_layout.sequence_layout_model import ViewState

from conftest import SAMPLE_1


def test_replacing_sequence_discards_annotations(annotation_types) -> None:
    model = SequenceDataModel(SAMPLE_1, annotation_types=annotation_types)
    model.annotations.add(0, 5)
    model.annotations.add(3, 8)
    model.window_start = 40

    model.set_sequence("GGCC")

    assert model.annotations.list() == []
    assert model.window_start == 0
    assert model.annotations.sequence_length == 4


def test_sequence_is_canonicalized_to_uppercase() -> None:
    model = SequenceDataModel("atgn")
    assert model.sequence == "ATGN"
    assert canonicalize_sequence("acgt-") == "ACGT-"


def test_sanitize_strips_unknown_symbols() -> None:
    assert sanitize_sequence("at g-c\nNx") == "ATGC"
    model = SequenceDataModel()
    assert model.set_sequence("aTn-GC", sanitize=True) == "ATGC"


def test_load_sample_by_name() -> None:
    model = SequenceDataModel()
    model.load_sample("Sample 2")
    assert model.sequence == SAMPLE_SEQUENCES["Sample 2"]
    assert model.header == "Sample 2"
    with pytest.raises(KeyError):
        model.load_sample("Sample 9")


def test_load_fasta(tmp_path) -> None:
    fasta = tmp_path / "demo.fasta"
    fasta.write_text(">first one\natgc\nATGC\n>second\nGGGG\n", encoding="utf-8")

    model = SequenceDataModel()
    records = model.load_fasta(str(fasta))

    assert records == [("first one", "atgcATGC"), ("second", "GGGG")]
    assert model.sequence == "ATGCATGC"
    assert model.header == "first one"

    model.load_fasta(str(fasta), record_index=1)
    assert model.sequence == "GGGG"


def test_load_empty_fasta_raises(tmp_path) -> None:
    fasta = tmp_path / "empty.fasta"
    fasta.write_text("", encoding="utf-8")
    with pytest.raises(ValueError):
        SequenceDataModel().load_fasta(str(fasta))


def test_derived_values_follow_current_sequence(annotation_types) -> None:
    model = SequenceDataModel("ATGATG", annotation_types=annotation_types)
    model.annotations.add(0, 2, label="orf")

    assert model.find_matches("atg") == [0, 3]
    assert model.statistics().gc_content == pytest.approx(100 / 3)

    layout = model.compute_layout(ViewState(row_width=3, row_count=2, search_query="ATG"))
    assert [row.text for row in layout.rows] == ["ATG", "ATG"]
    assert [b.label for b in layout.rows[0].bands] == ["orf"]
    assert layout.rows[1].bands == []


def test_layout_starts_from_model_window_position(annotation_types) -> None:
    model = SequenceDataModel(SAMPLE_1, annotation_types=annotation_types)

    layout = model.compute_layout(ViewState(window_start=500, row_width=10, row_count=1))
    assert layout.window_start == len(SAMPLE_1) - 1
    assert model.window_start == len(SAMPLE_1) - 1

    model.set_sequence("ATGCATGCAT")
    assert model.compute_layout().window_start == 0


def test_canonical_sequence_keeps_length_of_raw_input() -> None:
    model = SequenceDataModel("ßatg")
    assert model.sequence == "ßATG"
    assert model.find_matches("atg") == [1]
    flags = [s.is_match for s in model.compute_layout().rows[0].symbols]
    assert flags == [False, True, True, True]
