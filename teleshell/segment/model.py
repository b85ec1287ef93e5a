"""Annotated text model shared by the segmenter and its callers.

Offsets and lengths are UTF-16 code units (see :mod:`teleshell.segment.units`).
"""

from __future__ import annotations

from dataclasses import dataclass, field


class InvalidAnnotation(ValueError):
    """An annotation does not describe a span of the text it was given with."""


@dataclass(frozen=True)
class Annotation:
    kind: str  # "bold", "code", ...
    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length

    def overlaps(self, lo: int, hi: int) -> bool:
        """True if the span shares at least one code unit with ``[lo, hi)``."""
        return self.offset < hi and self.end > lo

    def validate(self, text_length: int) -> None:
        """Raise :class:`InvalidAnnotation` unless the span fits a text of *text_length* units."""
        if self.offset < 0 or self.length <= 0:
            raise InvalidAnnotation(
                f"{self.kind} annotation has offset={self.offset}, length={self.length}; "
                "offset must be >= 0 and length > 0"
            )
        if self.end > text_length:
            raise InvalidAnnotation(
                f"{self.kind} annotation [{self.offset}, {self.end}) exceeds "
                f"text length {text_length}"
            )


@dataclass
class Chunk:
    """One transport-legal message: text plus the annotations clipped to it."""

    text: str = ""
    annotations: list[Annotation] = field(default_factory=list)


@dataclass(frozen=True)
class Segment:
    """A piece of text written to a :class:`~teleshell.segment.segmenter.MessageWriter`."""

    text: str
    kind: str | None = None  # None: write without annotation
