"""Tests for path geometry providers (src.gradient_path.providers).

Tests:
    - PolylinePath: length, interpolation, clamping, degenerate inputs
    - BezierPath: endpoints exact, length of a straight curve
    - SVGPath: parsing, arc-length lookup, SVG file loading by id
    - Protocol conformance

Run:
    pytest tests/test_providers.py -v
"""

import math

import pytest
import torch

from src.gradient_path.errors import GeometryUnavailable
from src.gradient_path.providers import (
    BezierPath,
    PathGeometryProvider,
    PolylinePath,
    SVGPath,
)


SVG_DOCUMENT = """<?xml version="1.0" encoding="UTF-8"?>
<svg xmlns="http://www.w3.org/2000/svg" width="200" height="200" viewBox="0 0 200 200">
  <path id="first" d="M 0 0 L 50 0" stroke="black"/>
  <path id="wave" d="M 0 100 L 100 100 L 100 150" stroke="black"/>
</svg>
"""


# ============================================================================
# POLYLINE
# ============================================================================

def test_polyline_length_and_points():
    path = PolylinePath([(0, 0), (3, 4), (3, 10)])

    assert path.total_length() == pytest.approx(11.0)
    assert path.point_at_distance(0) == (0.0, 0.0)
    assert path.point_at_distance(5) == pytest.approx((3.0, 4.0))
    assert path.point_at_distance(8) == pytest.approx((3.0, 7.0))
    assert path.point_at_distance(11) == (3.0, 10.0)


def test_polyline_clamps_distance():
    path = PolylinePath([(0, 0), (10, 0)])
    assert path.point_at_distance(-5) == (0.0, 0.0)
    assert path.point_at_distance(50) == (10.0, 0.0)


def test_polyline_skips_zero_length_edges():
    path = PolylinePath([(0, 0), (0, 0), (10, 0), (10, 0)])
    assert path.total_length() == pytest.approx(10.0)
    assert path.point_at_distance(5) == pytest.approx((5.0, 0.0))


def test_polyline_single_vertex():
    path = PolylinePath([(4, 2)])
    assert path.total_length() == 0.0
    assert path.point_at_distance(3.0) == (4.0, 2.0)


def test_polyline_accepts_tensor():
    path = PolylinePath(torch.tensor([[0.0, 0.0], [0.0, 8.0]]))
    assert path.points.dtype == torch.float64
    assert path.point_at_distance(2.0) == pytest.approx((0.0, 2.0))


@pytest.mark.parametrize("points", [
    [],
    [(0.0, math.nan), (1.0, 1.0)],
    [(0.0, math.inf)],
    [(1.0, 2.0, 3.0)],
])
def test_polyline_unavailable(points):
    with pytest.raises(GeometryUnavailable):
        PolylinePath(points)


# ============================================================================
# BÉZIER
# ============================================================================

def test_bezier_straight_line():
    path = BezierPath((0, 0), (10, 0), (20, 0), (30, 0))

    assert path.total_length() == pytest.approx(30.0, abs=1e-6)
    assert path.point_at_distance(0) == (0.0, 0.0)
    assert path.point_at_distance(30) == (30.0, 0.0)


def test_bezier_curve_length_bounds():
    path = BezierPath((0, 0), (0, 50), (100, 50), (100, 0), max_err=0.01)
    chord = 100.0
    control_polygon = 50.0 + 100.0 + 50.0

    assert chord < path.total_length() < control_polygon
    assert path.point_at_distance(path.total_length()) == pytest.approx((100.0, 0.0))
    assert path.control_points.shape == (4, 2)


# ============================================================================
# SVG
# ============================================================================

def test_svg_line():
    path = SVGPath("M 0 0 L 20 0")

    assert path.total_length() == pytest.approx(20.0)
    assert path.point_at_distance(0) == (0.0, 0.0)
    assert path.point_at_distance(10) == pytest.approx((10.0, 0.0), abs=1e-6)
    assert path.point_at_distance(20) == (20.0, 0.0)


def test_svg_polyline_corner():
    path = SVGPath("M0 0 L10 0 L10 10")

    assert path.total_length() == pytest.approx(20.0)
    assert path.point_at_distance(15) == pytest.approx((10.0, 5.0), abs=1e-6)


def test_svg_cubic_matches_bezier_path():
    svg_path = SVGPath("M0 0 C0 50 100 50 100 0")
    bezier = BezierPath((0, 0), (0, 50), (100, 50), (100, 0), max_err=0.001)

    assert svg_path.total_length() == pytest.approx(bezier.total_length(), rel=1e-3)


@pytest.mark.parametrize("d", ["", "M 10 10"])
def test_svg_without_segments_unavailable(d):
    with pytest.raises(GeometryUnavailable):
        SVGPath(d)


def test_svg_from_file(tmp_path):
    svg_file = tmp_path / "drawing.svg"
    svg_file.write_text(SVG_DOCUMENT)

    first = SVGPath.from_svg_file(svg_file)
    wave = SVGPath.from_svg_file(svg_file, element_id="wave")

    assert first.total_length() == pytest.approx(50.0)
    assert wave.total_length() == pytest.approx(150.0)
    assert wave.point_at_distance(150) == pytest.approx((100.0, 150.0))


def test_svg_from_file_missing_id(tmp_path):
    svg_file = tmp_path / "drawing.svg"
    svg_file.write_text(SVG_DOCUMENT)

    with pytest.raises(GeometryUnavailable, match="missing"):
        SVGPath.from_svg_file(svg_file, element_id="missing")


def test_svg_from_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        SVGPath.from_svg_file(tmp_path / "nope.svg")


# ============================================================================
# PROTOCOL
# ============================================================================

def test_providers_satisfy_protocol():
    assert isinstance(PolylinePath([(0, 0), (1, 1)]), PathGeometryProvider)
    assert isinstance(BezierPath((0, 0), (1, 1), (2, 1), (3, 0)), PathGeometryProvider)
    assert isinstance(SVGPath("M0 0 L1 1"), PathGeometryProvider)


def test_duck_typed_provider_satisfies_protocol():
    class Circle:
        def total_length(self):
            return 2 * math.pi

        def point_at_distance(self, distance):
            return (math.cos(distance), math.sin(distance))

    assert isinstance(Circle(), PathGeometryProvider)
