"""Tests for the primitive id to speed lookup."""

import logging

import pytest

from mprimgen.primitives.speed import SpeedTable


class TestSpeedTable:
    """Lookups, replication and out-of-range ids."""

    def test_replicated_per_partition(self):
        table = SpeedTable([0.5, -0.5]).replicated(4)
        assert table.as_list() == [0.5] * 4 + [-0.5] * 4
        assert table.get_speed(3) == 0.5
        assert table.get_speed(4) == -0.5

    @pytest.mark.parametrize("prim_id", [-1, 2, 100])
    def test_unknown_id_returns_none(self, prim_id, caplog):
        table = SpeedTable([1.0, 2.0])
        with caplog.at_level(logging.WARNING, logger="mprimgen.primitives.speed"):
            assert table.get_speed(prim_id) is None
        assert f"primitive id {prim_id} is not available" in caplog.text

    def test_equality(self):
        a = SpeedTable()
        a.append(1)
        assert a == SpeedTable([1.0])
        assert a != SpeedTable([1.0, 1.0])
        assert len(a) == 1
