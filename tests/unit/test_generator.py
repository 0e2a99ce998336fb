"""End-to-end tests for the generation pipeline."""

import logging

import numpy as np
import pytest

from mprimgen import ConfigurationError, GenerationConfig, MobilityProfile, generate_primitives
from mprimgen.io import format_mprim
from mprimgen.primitives.types import MovementType


def _config(**overrides) -> GenerationConfig:
    params = dict(
        grid_size=0.1,
        num_angles=16,
        num_prim_partition=2,
        prim_accuracy=0.1,
        num_poses_per_prim=10,
    )
    params.update(overrides)
    return GenerationConfig(**params)


TURNING_PROFILE = MobilityProfile(
    multiplier_forward=1,
    multiplier_backward=2,
    multiplier_point_turn=3,
    multiplier_forward_turn=2,
    multiplier_backward_turn=4,
    speed=0.5,
    min_turning_radius=0.3,
)


class TestForwardOnly:
    """Forward motion with 16 headings."""

    def test_one_primitive_per_heading(self):
        table = generate_primitives(MobilityProfile(multiplier_forward=1), _config())
        assert len(table) == 16
        assert sorted(p.start_angle for p in table) == list(range(16))
        assert all(p.id == 0 for p in table)
        heading0 = table.for_start_angle(0)
        assert len(heading0) == 1
        assert heading0[0].discrete_end_pose == (1, 0, 0)

    def test_speed_lookup(self, caplog):
        table = generate_primitives(MobilityProfile(multiplier_forward=1), _config())
        assert table.get_speed(0) == 1.0
        with caplog.at_level(logging.WARNING):
            # Slot 1 exists in the speed table even though the search left it empty
            assert table.get_speed(1) == 1.0
            assert table.get_speed(2) is None
        assert "not available" in caplog.text


class TestProfiles:
    """Profile-level behaviour."""

    def test_all_zero_profile(self, caplog):
        with caplog.at_level(logging.WARNING):
            table = generate_primitives(MobilityProfile(), _config())
        assert len(table) == 0
        assert len(table.speed_table) == 0
        assert format_mprim(table).splitlines()[2] == "totalnumberofprimitives: 0"

    def test_unsupported_partition_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="mprimgen.primitives.generator"):
            table = generate_primitives(
                MobilityProfile(multiplier_forward=1), _config(num_prim_partition=3)
            )
        assert "num_prim_partition=3" in caplog.text
        assert len(table) > 0

    def test_backward_speed_negative(self):
        table = generate_primitives(TURNING_PROFILE, _config())
        for p in table:
            speed = table.get_speed(p.id)
            if p.movement_type in (MovementType.BACKWARD, MovementType.BACKWARD_TURN):
                assert speed == -0.5
            else:
                assert speed == 0.5

    def test_rejects_single_pose(self):
        with pytest.raises(ConfigurationError):
            _config(num_poses_per_prim=1)


class TestDeterminism:
    """Same inputs give the same table."""

    def test_repeatable_text(self):
        a = format_mprim(generate_primitives(TURNING_PROFILE, _config()))
        b = format_mprim(generate_primitives(TURNING_PROFILE, _config()))
        assert a == b

    def test_parallel_matches_serial(self):
        config = _config(num_angles=8)
        serial = generate_primitives(TURNING_PROFILE, config)
        parallel = generate_primitives(TURNING_PROFILE, config, workers=2)
        assert [(p.id, p.start_angle, p.discrete_end_pose) for p in serial] == [
            (p.id, p.start_angle, p.discrete_end_pose) for p in parallel
        ]
        for s, p in zip(serial, parallel):
            assert np.allclose(s.intermediate_poses, p.intermediate_poses)


class TestSymmetry:
    """Left and right arcs mirror each other at heading 0."""

    @pytest.fixture(scope="class")
    def heading0(self):
        mobility = MobilityProfile(
            multiplier_forward_turn=2, multiplier_backward_turn=2, min_turning_radius=0.3
        )
        return generate_primitives(mobility, _config(num_prim_partition=4)).for_start_angle(0)

    @staticmethod
    def _mirrored(heading0, left_base, right_base):
        left = [p for p in heading0 if p.id // 4 == left_base]
        right = [p for p in heading0 if p.id // 4 == right_base]
        left_ends = {(p.end_pose[0], p.end_pose[1], p.end_angle_raw) for p in left}
        right_ends = {(p.end_pose[0], -p.end_pose[1], -p.end_angle_raw) for p in right}
        return left, left_ends, right_ends

    def test_forward_turns_mirror(self, heading0):
        left, left_ends, right_ends = self._mirrored(heading0, 0, 1)
        assert left
        assert all(p.movement_type is MovementType.FORWARD_TURN for p in left)
        assert left_ends == right_ends

    def test_backward_turns_mirror(self, heading0):
        left, left_ends, right_ends = self._mirrored(heading0, 2, 3)
        assert left
        assert all(p.movement_type is MovementType.BACKWARD_TURN for p in left)
        # Backward arcs end behind the start
        assert all(p.end_pose[0] < 0 for p in left)
        assert left_ends == right_ends
