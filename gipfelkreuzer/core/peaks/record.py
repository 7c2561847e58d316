"""Peak records and their validation.

A ``PeakRecord`` is a closed genomic interval ``[start, end]`` with a summit
coordinate inside it. Records are immutable: every recomputation (merging,
harmonising) creates a new record and re-runs the validation.
"""

from __future__ import annotations

from dataclasses import dataclass

# Coordinates are unsigned 64 bit integers.
MIN_COORDINATE = 0
MAX_COORDINATE = 2**64 - 1


class PeakDataError(ValueError):
    """Raised when peak data violates the peak record invariants."""

    pass


class InvalidInterval(PeakDataError):
    """Raised when a peak's start is after its end or outside the coordinate space."""

    pass


class SummitOutOfRange(PeakDataError):
    """Raised when a peak's summit is not within its interval."""

    pass


def midpoint(start: int, end: int) -> int:
    """Return the integer midpoint of ``[start, end]``, rounded down."""
    return start + (end - start) // 2


@dataclass(frozen=True)
class PeakRecord:
    """A genomic peak region.

    Attributes
    ----------
    id : int
        Identifier of the peak (provenance, not necessarily unique)
    start : int
        Start coordinate of the peak region
    end : int
        End coordinate of the peak region (inclusive)
    summit : int
        Coordinate of the peak summit within the region

    Raises
    ------
    InvalidInterval
        If a value is not an integer, ``start > end`` or any value is outside
        the coordinate space
    SummitOutOfRange
        If the summit is not within ``[start, end]``
    """

    id: int
    start: int
    end: int
    summit: int

    def __post_init__(self) -> None:
        for name in ("id", "start", "end", "summit"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidInterval(
                    f"The {name} {value!r} of peak {self.id!r} must be an integer, "
                    f"got {type(value).__name__}."
                )
        if self.id < 0:
            raise InvalidInterval(f"The peak ID {self.id} must not be negative.")
        for name, value in (("start", self.start), ("end", self.end), ("summit", self.summit)):
            if not MIN_COORDINATE <= value <= MAX_COORDINATE:
                raise InvalidInterval(
                    f"The {name} coordinate {value} of peak {self.id} is outside "
                    f"the coordinate space [{MIN_COORDINATE}, {MAX_COORDINATE}]."
                )
        if self.start > self.end:
            raise InvalidInterval(
                f"The end coordinate {self.end} of peak {self.id} is smaller "
                f"than the start coordinate {self.start}."
            )
        if self.summit < self.start or self.summit > self.end:
            raise SummitOutOfRange(
                f"The summit {self.summit} of peak {self.id} is not within "
                f"the peak region [{self.start}, {self.end}]."
            )

    def length(self) -> int:
        """Return the inclusive length of the peak region."""
        return self.end - self.start + 1

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "start": self.start,
            "end": self.end,
            "summit": self.summit,
        }
