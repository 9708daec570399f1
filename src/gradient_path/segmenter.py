"""Group a flat sample sequence into overlapping segments.

Segment ``s`` covers arena indices ``s * eff .. s * eff + eff`` inclusive,
so its last sample is the first sample of segment ``s + 1``.
"""

import logging
from typing import Sequence

from .errors import InvalidConfiguration
from .samples import Sample, Segment, SegmentSet

logger = logging.getLogger(__name__)


def segment_samples(
    samples: Sequence[Sample],
    num_segments: int,
    effective_samples_per_segment: int
) -> SegmentSet:
    """Partition samples into ``num_segments`` segments sharing boundaries.

    Parameters
    ----------
    samples : Sequence[Sample]
        Output of ``sample_path``
    num_segments : int
        Number of segments (≥ 1)
    effective_samples_per_segment : int
        Samples each segment owns before borrowing the next boundary (≥ 1)

    Returns
    -------
    SegmentSet
        Segments of length ``effective_samples_per_segment + 1``

    Raises
    ------
    InvalidConfiguration
        If counts are < 1 or ``len(samples) != num_segments * eff + 1``
    """
    if num_segments < 1 or effective_samples_per_segment < 1:
        raise InvalidConfiguration(
            f"num_segments and effective_samples_per_segment must be >= 1, "
            f"got {num_segments} and {effective_samples_per_segment}"
        )

    expected = num_segments * effective_samples_per_segment + 1
    if len(samples) != expected:
        raise InvalidConfiguration(
            f"Expected {expected} samples for {num_segments} segments of "
            f"{effective_samples_per_segment + 1}, got {len(samples)}"
        )

    arena = tuple(samples)
    segments = []
    for s in range(num_segments):
        current_start = s * effective_samples_per_segment
        next_start = current_start + effective_samples_per_segment
        segments.append(Segment(arena=arena, index=s, start=current_start, stop=next_start + 1))

    logger.debug("Grouped %d samples into %d segments", len(arena), num_segments)

    return SegmentSet(
        samples=arena,
        effective_samples_per_segment=effective_samples_per_segment,
        segments=tuple(segments)
    )
