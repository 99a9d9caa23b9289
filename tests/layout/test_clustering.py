"""Tests for pdf2txt.layout.clustering: row grouping by vertical proximity."""

import logging

from conftest import make_fragment

from pdf2txt.layout.clustering import cluster_rows, reading_order


def _texts(rows):
    return [[f.text for f in row.fragments] for row in rows]


class TestReadingOrder:
    def test_top_down_then_left_right(self):
        frags = [
            make_fragment("c", 0, 50),
            make_fragment("b", 20, 100),
            make_fragment("a", 10, 100),
        ]
        assert [f.text for f in reading_order(frags)] == ["a", "b", "c"]


class TestClusterRows:
    def test_empty_input(self):
        assert cluster_rows([], 2.0) == []

    def test_single_fragment_row(self):
        rows = cluster_rows([make_fragment("only", 5, 10)], 2.0)
        assert len(rows) == 1
        assert rows[0].anchor_y == 10
        assert _texts(rows) == [["only"]]

    def test_rows_top_to_bottom(self):
        frags = [
            make_fragment("bottom", 0, 10),
            make_fragment("top", 0, 300),
            make_fragment("middle", 0, 150),
        ]
        assert _texts(cluster_rows(frags, 2.0)) == [["top"], ["middle"], ["bottom"]]

    def test_fragments_left_to_right(self):
        frags = [
            make_fragment("right", 200, 100),
            make_fragment("left", 0, 100.5),
            make_fragment("mid", 100, 99.5),
        ]
        assert _texts(cluster_rows(frags, 2.0)) == [["left", "mid", "right"]]

    def test_tolerance_is_strict(self):
        frags = [make_fragment("a", 0, 100), make_fragment("b", 10, 98)]
        assert _texts(cluster_rows(frags, 2.0)) == [["a"], ["b"]]

    def test_within_tolerance_joins(self):
        frags = [make_fragment("a", 0, 100), make_fragment("b", 10, 98.5)]
        assert _texts(cluster_rows(frags, 2.0)) == [["a", "b"]]

    def test_anchor_does_not_move(self):
        """A third fragment near the second member but far from the anchor
        opens its own row."""
        frags = [
            make_fragment("a", 0, 100),
            make_fragment("b", 10, 98.5),
            make_fragment("c", 20, 97.2),
        ]
        rows = cluster_rows(frags, 2.0)
        assert [r.anchor_y for r in rows] == [100, 97.2]
        assert _texts(rows) == [["a", "b"], ["c"]]

    def test_members_keep_raw_y(self):
        frags = [make_fragment("a", 0, 100), make_fragment("b", 10, 99)]
        row = cluster_rows(frags, 2.0)[0]
        assert [f.y for f in row.fragments] == [100, 99]

    def test_identical_positions_keep_input_order(self):
        frags = [make_fragment("first", 0, 50), make_fragment("second", 0, 50)]
        assert _texts(cluster_rows(frags, 2.0)) == [["first", "second"]]

    def test_input_not_mutated(self):
        frags = [make_fragment("b", 10, 5), make_fragment("a", 0, 50)]
        snapshot = list(frags)
        cluster_rows(frags, 2.0)
        assert frags == snapshot

    def test_wider_tolerance_merges(self):
        frags = [make_fragment("a", 0, 100), make_fragment("b", 10, 96)]
        assert len(cluster_rows(frags, 2.0)) == 2
        assert len(cluster_rows(frags, 5.0)) == 1


class TestClusterDebugLogging:
    LOGGER = "pdf2txt.layout.clustering"

    def _frags(self):
        return [
            make_fragment("A", 0, 100),
            make_fragment("B", 50, 100),
            make_fragment("C", 0, 80),
        ]

    def test_one_record_per_fragment(self, caplog):
        caplog.set_level(logging.DEBUG, logger=self.LOGGER)
        cluster_rows(self._frags(), 2.0, debug=True)
        messages = [r.getMessage() for r in caplog.records if r.name == self.LOGGER]
        assert messages == [
            '"A" y=100.00 x=0.00 grouped with 2 items',
            '"B" y=100.00 x=50.00 grouped with 2 items',
            '"C" y=80.00 x=0.00 grouped with 1 items',
        ]

    def test_silent_without_debug(self, caplog):
        caplog.set_level(logging.DEBUG, logger=self.LOGGER)
        cluster_rows(self._frags(), 2.0)
        assert not [r for r in caplog.records if r.name == self.LOGGER]

    def test_debug_does_not_change_rows(self):
        assert cluster_rows(self._frags(), 2.0, debug=True) == cluster_rows(
            self._frags(), 2.0
        )
