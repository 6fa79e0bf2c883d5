"""Tests for rcl/tree/stream.py - join-order parsing and validation."""
from __future__ import annotations

import io

import pytest

from rcl.errors import InvalidStream
from rcl.tree.stream import open_merge_stream, parse_record, read_merge_events
from tests.helpers.streams import HEADER, merge, stream_lines


@pytest.mark.unit
class TestReadMergeEvents:
    """Stream-level behaviour."""

    def test_header_is_discarded(self, three_leaf_lines):
        events = list(read_merge_events(three_leaf_lines))
        assert len(events) == 2
        assert events[0].order_index == 0

    def test_header_discarded_even_if_it_looks_like_data(self):
        lines = stream_lines([merge(1, 2, 1, 1)], header="0 A B 1 2 1.0 1 1 2 1 0.5 0.0")
        assert len(list(read_merge_events(lines))) == 1

    def test_fields_are_typed(self, three_leaf_lines):
        event = list(read_merge_events(three_leaf_lines))[1]
        assert event.cluster_id_x == 1
        assert event.cluster_id_y == 3
        assert event.cluster_size_x == 2
        assert event.merged_size == 3
        assert event.similarity == pytest.approx(60.0)
        assert event.quality == pytest.approx(0.9)
        assert event.repr_item_y == "C"

    def test_line_numbers_recorded(self, three_leaf_lines):
        events = list(read_merge_events(three_leaf_lines))
        assert [e.line for e in events] == [2, 3]

    def test_blank_lines_skipped(self):
        lines = [HEADER + "\n", "\n", "0 A B 1 2 1.0 1 1 2 1 0.5 0.0\n", "   \n"]
        assert len(list(read_merge_events(lines))) == 1

    def test_empty_stream_yields_nothing(self):
        assert list(read_merge_events([])) == []
        assert list(read_merge_events([HEADER])) == []

    def test_file_handle(self, three_leaf_lines):
        handle = io.StringIO("".join(three_leaf_lines))
        assert len(list(open_merge_stream(handle))) == 2

    def test_reading_is_lazy(self):
        """Errors surface only when the bad record is reached."""
        lines = stream_lines([merge(1, 2, 1, 1), ["bad"]])
        events = read_merge_events(lines)
        assert next(events).cluster_id_x == 1
        with pytest.raises(InvalidStream):
            next(events)


@pytest.mark.unit
class TestParseRecord:
    """Single-record validation."""

    def test_clm_layout(self):
        fields = "7 n1 n2 itemX itemY 850 4 9 3 1 4 12 0.3 1 2.5".split()
        event = parse_record(fields, line=8)
        assert event.order_index == 7
        assert event.repr_item_x == "itemX"
        assert event.cluster_id_x == 4
        assert event.cluster_id_y == 9
        assert event.similarity == pytest.approx(850.0)
        assert event.cluster_size_x == 3
        assert event.cluster_size_y == 1
        assert event.edge_count == 12
        assert event.quality == pytest.approx(2.5)

    def test_integral_float_counts_accepted(self):
        fields = "0 A B 1 2 1.0 1.0 1 2.0 3 0.5 0.0".split()
        assert parse_record(fields, line=2).merged_size == 2

    @pytest.mark.parametrize("n_fields", [1, 11, 13, 14, 16])
    def test_wrong_field_count(self, n_fields):
        with pytest.raises(InvalidStream, match="expected 12 or 15 fields"):
            parse_record(["1"] * n_fields, line=5)

    def test_non_numeric_id(self):
        fields = "0 A B one 2 1.0 1 1 2 1 0.5 0.0".split()
        with pytest.raises(InvalidStream) as excinfo:
            parse_record(fields, line=4)
        assert excinfo.value.line == 4
        assert "line 4" in str(excinfo.value)
        assert "cluster_id_x" in str(excinfo.value)

    def test_non_numeric_quality(self):
        fields = "0 A B 1 2 1.0 1 1 2 1 0.5 good".split()
        with pytest.raises(InvalidStream, match="quality"):
            parse_record(fields, line=2)

    def test_fractional_size_rejected(self):
        fields = "0 A B 1 2 1.0 1.5 1 2 1 0.5 0.0".split()
        with pytest.raises(InvalidStream, match="integral"):
            parse_record(fields, line=2)

    @pytest.mark.parametrize("token", ["nan", "inf", "-inf", "Infinity", "0x1p3", "1_0"])
    def test_non_decimal_similarity_rejected(self, token):
        fields = f"0 A B 1 2 {token} 1 1 2 1 0.5 0.0".split()
        with pytest.raises(InvalidStream, match="non-numeric similarity"):
            parse_record(fields, line=2)

    @pytest.mark.parametrize("token", ["inf", "nan", "1_0"])
    def test_non_decimal_quality_rejected(self, token):
        fields = f"0 A B 1 2 1.0 1 1 2 1 0.5 {token}".split()
        with pytest.raises(InvalidStream, match="non-numeric quality"):
            parse_record(fields, line=2)

    def test_overflowing_similarity_rejected(self):
        fields = "0 A B 1 2 1e999 1 1 2 1 0.5 0.0".split()
        with pytest.raises(InvalidStream, match="out of range"):
            parse_record(fields, line=2)

    @pytest.mark.parametrize("token", ["1_0", "٣", "inf"])
    def test_non_decimal_cluster_id_rejected(self, token):
        fields = f"0 A B {token} 2 1.0 1 1 2 1 0.5 0.0".split()
        with pytest.raises(InvalidStream, match="cluster_id_x"):
            parse_record(fields, line=2)

    def test_exponent_notation_accepted(self):
        fields = "0 A B 1 2 8.5e2 1 1 2 1 0.5 1e-05".split()
        event = parse_record(fields, line=2)
        assert event.similarity == pytest.approx(850.0)
        assert event.quality == pytest.approx(1e-05)

    def test_inconsistent_merged_size(self):
        fields = "0 A B 1 2 1.0 1 1 3 1 0.5 0.0".split()
        with pytest.raises(InvalidStream, match="merged size 3 != 1 \\+ 1"):
            parse_record(fields, line=2)

    def test_zero_size_rejected(self):
        fields = "0 A B 1 2 1.0 0 1 1 1 0.5 0.0".split()
        with pytest.raises(InvalidStream, match="positive"):
            parse_record(fields, line=2)
