"""Sample and segment value types.

A sampling call produces one immutable arena of ``Sample`` values. Segments
are index-range views into that arena, so the boundary sample shared by two
adjacent segments is literally the same value in both:

    arena:     s0 s1 s2 s3 s4 s5 s6
    segment 0: s0 s1 s2
    segment 1:       s2 s3 s4
    segment 2:             s4 s5 s6

Flattening re-linearizes segments into ``FlatSample`` values tagged with the
owning segment index; boundary samples then appear once per owner.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple, Union, overload


@dataclass(frozen=True, slots=True)
class Sample:
    """Point on the path at a normalized progress.

    Parameters
    ----------
    x, y : float
        Coordinates, possibly rounded to the sampling precision.
    progress : float
        ``index / total_samples``, in [0, 1].
    """

    x: float
    y: float
    progress: float

    def as_point(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True, slots=True)
class FlatSample:
    """Sample tagged with the index of the segment it was emitted for."""

    x: float
    y: float
    progress: float
    id: int

    def as_point(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True, slots=True, eq=False)
class Segment(Sequence):
    """Inclusive run of samples ``arena[start:stop]`` numbered ``index``.

    Equality compares the segment index and the sample values, not arena
    identity. Only another ``Segment`` compares equal; lists and tuples of
    the same samples do not.
    """

    arena: Tuple[Sample, ...]
    # field() keeps Sequence.index from becoming the default
    index: int = field()
    start: int
    stop: int

    def __len__(self) -> int:
        return self.stop - self.start

    @overload
    def __getitem__(self, i: int) -> Sample: ...

    @overload
    def __getitem__(self, i: slice) -> Tuple[Sample, ...]: ...

    def __getitem__(self, i: Union[int, slice]):
        if isinstance(i, slice):
            return self.arena[self.start:self.stop][i]
        n = len(self)
        if i < 0:
            i += n
        if not 0 <= i < n:
            raise IndexError(f"Sample index {i} out of range for segment of length {n}")
        return self.arena[self.start + i]

    def __iter__(self) -> Iterator[Sample]:
        return iter(self.arena[self.start:self.stop])

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Segment):
            return self.index == other.index and tuple(self) == tuple(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.index, tuple(self)))

    @property
    def first(self) -> Sample:
        return self.arena[self.start]

    @property
    def last(self) -> Sample:
        return self.arena[self.stop - 1]

    @property
    def middle(self) -> Sample:
        """Sample at ``len // 2``; its progress styles the whole segment."""
        return self[len(self) // 2]

    def points(self) -> List[Tuple[float, float]]:
        return [s.as_point() for s in self]


@dataclass(frozen=True, slots=True)
class SegmentSet(Sequence):
    """Ordered segments over one shared sample arena.

    Invariant: ``len(segments) * effective_samples_per_segment + 1 == len(samples)``.
    """

    samples: Tuple[Sample, ...]
    effective_samples_per_segment: int
    segments: Tuple[Segment, ...]

    def __len__(self) -> int:
        return len(self.segments)

    def __getitem__(self, i):
        return self.segments[i]

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    @property
    def num_segments(self) -> int:
        return len(self.segments)

    @property
    def total_samples(self) -> int:
        """Number of sampling intervals (one less than ``len(samples)``)."""
        return len(self.samples) - 1
