"""Re-linearize segments into one sequence tagged by segment index."""

from typing import Iterable, List

from .samples import FlatSample, Sample


def flatten(segments: Iterable[Iterable[Sample]]) -> List[FlatSample]:
    """Concatenate all segments' samples, tagging each with its segment index.

    Boundary samples are kept once per owning segment, so the result has
    ``sum(len(seg) for seg in segments)`` entries. Each copy may be styled
    for the segment it closes or opens.
    """
    return [
        FlatSample(x=sample.x, y=sample.y, progress=sample.progress, id=i)
        for i, segment in enumerate(segments)
        for sample in segment
    ]
