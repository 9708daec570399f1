"""Tests for ribbon outlining (src.gradient_path.outline).

Tests:
    - Straight three-sample segment → six-point band at ±width/2
    - Two-sample segment → four-point ribbon
    - Turn: each sample offset by the edge that ends at it
    - Ring reconstruction order (even forward, odd reversed)
    - Zero width collapses both rails onto the polyline
    - Output length 2N for any width
    - Rounding (ties away from zero) and error cases, including non-finite width

Run:
    pytest tests/test_outline.py -v
"""

import math

import pytest
import torch

from src.gradient_path.errors import DegenerateSegment, InvalidConfiguration
from src.gradient_path.outline import (
    close_ribbon,
    edge_angles,
    outline_stroke,
    perpendicular_points,
    rail_pairs,
)
from src.gradient_path.providers import PolylinePath
from src.gradient_path.sampler import sample_path
from src.gradient_path.segmenter import segment_samples


def assert_points_close(actual, expected, atol=1e-9):
    assert len(actual) == len(expected)
    for (ax, ay), (ex, ey) in zip(actual, expected):
        assert ax == pytest.approx(ex, abs=atol)
        assert ay == pytest.approx(ey, abs=atol)


# ============================================================================
# SCENARIOS
# ============================================================================

def test_horizontal_band():
    """[(0,0),(10,0),(20,0)], width 4: rail A at y=-2 forward, rail B at y=+2 back."""
    ring = outline_stroke([(0, 0), (10, 0), (20, 0)], width=4)

    assert ring == [
        (0.0, -2.0), (10.0, -2.0), (20.0, -2.0),
        (20.0, 2.0), (10.0, 2.0), (0.0, 2.0),
    ]


def test_two_sample_ribbon():
    ring = outline_stroke([(0, 0), (0, 10)], width=2)

    # Edge points +y: rail A offset to +x, rail B to -x
    assert_points_close(ring, [(1, 0), (1, 10), (-1, 10), (-1, 0)])


def test_turn_uses_incoming_edge_angle():
    ring = outline_stroke([(0, 0), (10, 0), (10, 10)], width=2)

    assert_points_close(ring, [
        (0, -1), (10, -1), (11, 10),
        (9, 10), (10, 1), (0, 1),
    ])


def test_accepts_segment_views():
    samples = sample_path(PolylinePath([(0.0, 0.0), (40.0, 0.0)]), 2, 3)
    segments = segment_samples(samples, 2, 2)

    ring = outline_stroke(segments[1], width=6)
    assert ring == [
        (20.0, -3.0), (30.0, -3.0), (40.0, -3.0),
        (40.0, 3.0), (30.0, 3.0), (20.0, 3.0),
    ]


def test_accepts_tensor():
    pts = torch.tensor([[0.0, 0.0], [5.0, 0.0]])
    assert outline_stroke(pts, width=2) == [(0.0, -1.0), (5.0, -1.0), (5.0, 1.0), (0.0, 1.0)]


# ============================================================================
# BUILDING BLOCKS
# ============================================================================

def test_edge_angles():
    pts = torch.tensor([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]], dtype=torch.float64)
    angles = edge_angles(pts)
    assert torch.allclose(angles, torch.tensor([0.0, math.pi / 2, math.pi], dtype=torch.float64))


def test_perpendicular_points():
    pairs = perpendicular_points(
        torch.tensor(0.0, dtype=torch.float64),
        2.0,
        torch.tensor([5.0, 5.0], dtype=torch.float64)
    )
    assert pairs.tolist() == [[5.0, 3.0], [5.0, 7.0]]


def test_rail_pairs_emission_order():
    pairs = rail_pairs([(0, 0), (10, 0), (20, 0)], width=4)

    assert pairs.shape == (6, 2)
    assert pairs.tolist() == [
        [0.0, -2.0], [0.0, 2.0],
        [10.0, -2.0], [10.0, 2.0],
        [20.0, -2.0], [20.0, 2.0],
    ]


def test_close_ribbon_order():
    """Emission indices 0..7 → ring order 0, 2, 4, 6, 7, 5, 3, 1."""
    pairs = torch.arange(8, dtype=torch.float64).unsqueeze(1).repeat(1, 2)
    ring = close_ribbon(pairs)

    assert ring[:, 0].tolist() == [0, 2, 4, 6, 7, 5, 3, 1]


# ============================================================================
# PROPERTIES
# ============================================================================

@pytest.mark.parametrize("width", [0.0, 0.5, 3.0, 25.0])
def test_outline_length(width):
    segment = [(0, 0), (3, 4), (7, 4), (9, 1), (12, 6)]
    assert len(outline_stroke(segment, width)) == 2 * len(segment)


def test_zero_width_collapses_rails():
    segment = [(0.0, 0.0), (3.0, 4.0), (7.0, 4.0), (9.0, 1.0)]
    ring = outline_stroke(segment, 0)

    rail_a = ring[:len(segment)]
    rail_b = ring[len(segment):][::-1]
    assert_points_close(rail_a, segment)
    assert_points_close(rail_b, segment)


def test_rails_are_width_apart():
    segment = [(0.0, 0.0), (3.0, 4.0), (7.0, 4.0)]
    pairs = rail_pairs(segment, width=5.0)
    gaps = torch.norm(pairs[0::2] - pairs[1::2], dim=1)
    assert torch.allclose(gaps, torch.full_like(gaps, 5.0))


def test_precision_rounding():
    ring = outline_stroke([(0.0, 0.0), (3.0, 4.0)], width=1.0, precision=1)

    # Offset (sin a, -cos a) * 0.5 = (0.4, -0.3)
    assert ring == [(0.4, -0.3), (3.4, 3.7), (2.6, 4.3), (-0.4, 0.3)]


def test_precision_zero_gives_integers():
    ring = outline_stroke([(0.0, 0.0), (3.0, 4.0), (8.0, 4.0)], width=3.3, precision=0)
    for x, y in ring:
        assert float(x).is_integer() and float(y).is_integer()


def test_precision_ties_round_away_from_zero():
    # Offset 0.125 on each side sits exactly between 0.12 and 0.13
    ring = outline_stroke([(0.0, 0.0), (1.0, 0.0)], width=0.25, precision=2)
    assert ring == [(0.0, -0.13), (1.0, -0.13), (1.0, 0.13), (0.0, 0.13)]


def test_deterministic():
    segment = [(0.0, 0.0), (3.0, 4.0), (7.0, 4.0)]
    assert outline_stroke(segment, 2.5) == outline_stroke(segment, 2.5)


# ============================================================================
# ERRORS
# ============================================================================

@pytest.mark.parametrize("segment", [[], [(1.0, 1.0)]])
def test_short_segment_is_degenerate(segment):
    with pytest.raises(DegenerateSegment):
        outline_stroke(segment, 2.0)


def test_negative_width_rejected():
    with pytest.raises(InvalidConfiguration):
        outline_stroke([(0, 0), (1, 0)], -1.0)


@pytest.mark.parametrize("width", [math.nan, math.inf, -math.inf])
def test_non_finite_width_rejected(width):
    with pytest.raises(InvalidConfiguration):
        outline_stroke([(0, 0), (1, 0)], width)


def test_negative_precision_rejected():
    with pytest.raises(InvalidConfiguration):
        outline_stroke([(0, 0), (1, 0)], 1.0, precision=-2)


def test_precision_above_float64_limit_rejected():
    with pytest.raises(InvalidConfiguration):
        outline_stroke([(0, 0), (1, 0)], 1.0, precision=400)
