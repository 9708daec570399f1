"""Gradient path core: sampling, segmentation, flattening and outlining.

Modules:
    - providers: path geometry capability + polyline/Bézier/SVG providers
    - sampler: arc-length sampling into progress-tagged samples
    - segmenter: overlapping segments over one sample arena
    - flatten: segments → samples tagged with segment index
    - outline: segment → closed ribbon polygon of a given width
    - pipeline: get_data(), GradientPath render primitives
    - svg: path-data and SVG element serialization

Invariants:
    - Adjacent segments share their boundary sample
    - progress = index / total_samples, strictly increasing in [0, 1]
    - Outline of an N-sample segment has exactly 2N points

Usage:
    from src.gradient_path import SVGPath, get_data, outline_stroke

    data = get_data(SVGPath("M0 0 C 40 0 60 80 100 80"), segments=8, samples=5)
    ribbons = [outline_stroke(seg, width=6) for seg in data]
"""

from .errors import (
    DegenerateSampling,
    DegenerateSegment,
    GeometryUnavailable,
    GradientPathError,
    InvalidConfiguration,
)
from .flatten import flatten
from .outline import close_ribbon, outline_stroke, perpendicular_points, rail_pairs
from .pipeline import (
    CirclePrimitive,
    GradientPath,
    PathPrimitive,
    get_data,
    outline_segments,
    provider_from_source,
)
from .providers import BezierPath, PathGeometryProvider, PolylinePath, SVGPath
from .sampler import DEFAULT_PRECISION, effective_samples_per_segment, sample_path
from .samples import FlatSample, Sample, Segment, SegmentSet
from .segmenter import segment_samples

__all__ = [
    # Errors
    'GradientPathError',
    'InvalidConfiguration',
    'DegenerateSampling',
    'DegenerateSegment',
    'GeometryUnavailable',
    # Data model
    'Sample',
    'FlatSample',
    'Segment',
    'SegmentSet',
    # Providers
    'PathGeometryProvider',
    'PolylinePath',
    'BezierPath',
    'SVGPath',
    # Core
    'DEFAULT_PRECISION',
    'effective_samples_per_segment',
    'sample_path',
    'segment_samples',
    'flatten',
    'perpendicular_points',
    'rail_pairs',
    'close_ribbon',
    'outline_stroke',
    # Orchestration
    'get_data',
    'outline_segments',
    'provider_from_source',
    'GradientPath',
    'PathPrimitive',
    'CirclePrimitive',
]
