"""Arc-length sampling of a path into progress-tagged samples.

Walks normalized progress 0..1 in ``total_samples`` equal steps and asks the
geometry provider for the point at each arc-length distance. The number of
steps is chosen so the samples can later be grouped into ``num_segments``
segments of ``samples_per_segment`` samples each, where every segment
repeats the first sample of the next one:

    effective = samples_per_segment - 1   (if samples_per_segment > 1, else 1)
    total_samples = num_segments * effective
    returned samples = total_samples + 1

Coordinates are rounded to ``precision`` fractional digits (default 2);
``precision=None`` keeps full floating-point values.
"""

import logging
import math
from typing import List, Optional

import torch

from src.utils import geometry

from .errors import DegenerateSampling, GeometryUnavailable, InvalidConfiguration
from .providers import PathGeometryProvider
from .samples import Sample

logger = logging.getLogger(__name__)

DEFAULT_PRECISION = 2
# float64 carries about 15 significant decimal digits
MAX_PRECISION = 15


def _require_count(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfiguration(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise InvalidConfiguration(f"{name} must be >= 1, got {value}")
    return value


def validate_precision(precision: Optional[int]) -> Optional[int]:
    """Check a rounding precision: None or an integer in [0, MAX_PRECISION]."""
    if precision is None:
        return None
    if isinstance(precision, bool) or not isinstance(precision, int):
        raise InvalidConfiguration(f"precision must be an integer or None, got {precision!r}")
    if precision < 0:
        raise InvalidConfiguration(f"precision must be >= 0, got {precision}")
    if precision > MAX_PRECISION:
        raise InvalidConfiguration(f"precision must be <= {MAX_PRECISION}, got {precision}")
    return precision


def effective_samples_per_segment(samples_per_segment: int) -> int:
    """Samples each segment owns exclusively (the last one is borrowed)."""
    _require_count("samples_per_segment", samples_per_segment)
    return samples_per_segment - 1 if samples_per_segment > 1 else 1


def sample_path(
    path: PathGeometryProvider,
    num_segments: int,
    samples_per_segment: int,
    precision: Optional[int] = DEFAULT_PRECISION
) -> List[Sample]:
    """Sample a path at evenly spaced arc-length positions.

    Parameters
    ----------
    path : PathGeometryProvider
        Source of ``total_length()`` and ``point_at_distance()``
    num_segments : int
        Number of segments the samples will be grouped into (≥ 1)
    samples_per_segment : int
        Samples per segment including the shared boundary sample (≥ 1)
    precision : int, optional
        Fractional digits to round coordinates to; None for no rounding

    Returns
    -------
    List[Sample]
        ``num_segments * effective + 1`` samples, progress strictly increasing
        from 0.0 to 1.0

    Raises
    ------
    InvalidConfiguration
        Bad counts or precision (checked before any geometry query)
    DegenerateSampling
        If the computed number of intervals is zero
    GeometryUnavailable
        If the provider cannot report a finite length or point

    Examples
    --------
    >>> samples = sample_path(PolylinePath([(0, 0), (20, 0)]), 1, 3)
    >>> [(s.x, s.progress) for s in samples]
    [(0.0, 0.0), (10.0, 0.5), (20.0, 1.0)]
    """
    _require_count("num_segments", num_segments)
    effective = effective_samples_per_segment(samples_per_segment)
    precision = validate_precision(precision)

    total_samples = num_segments * effective
    if total_samples == 0:
        raise DegenerateSampling(
            f"Sampling {num_segments} segments x {effective} samples yields no intervals"
        )

    path_length = float(path.total_length())
    if not math.isfinite(path_length) or path_length < 0.0:
        raise GeometryUnavailable(f"Path reported an invalid length: {path_length}")

    progress = [k / total_samples for k in range(total_samples + 1)]
    xy = torch.tensor(
        [path.point_at_distance(p * path_length) for p in progress],
        dtype=geometry.DTYPE
    )
    if not torch.isfinite(xy).all():
        raise GeometryUnavailable("Path reported a non-finite point")

    xy = geometry.round_to_precision(xy, precision)

    logger.debug(
        "Sampled %d points (segments=%d, effective=%d, length=%.3f, precision=%s)",
        len(progress), num_segments, effective, path_length, precision
    )

    return [
        Sample(x=x, y=y, progress=p)
        for (x, y), p in zip(xy.tolist(), progress)
    ]
