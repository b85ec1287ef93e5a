"""Clip annotations to chunk windows.

A window ``[lo, hi)`` is the range of code units of the source text that one
chunk carries. Each annotation either lies outside the window or contributes
a clipped copy whose offset is relative to ``lo``.
"""

from __future__ import annotations

import enum

from teleshell.segment.model import Annotation


class Placement(enum.Enum):
    INSIDE = "inside"                # fully inside the window
    STARTS_INSIDE = "starts_inside"  # runs past the right edge
    ENDS_INSIDE = "ends_inside"      # started before the left edge
    SPANS = "spans"                  # covers the whole window
    OUTSIDE = "outside"


def classify(annotation: Annotation, lo: int, hi: int) -> Placement:
    """Classify how *annotation* relates to the window ``[lo, hi)``."""
    start, end = annotation.offset, annotation.end
    if start >= lo and end <= hi:
        return Placement.INSIDE
    if lo <= start < hi and end > hi:
        return Placement.STARTS_INSIDE
    if start < lo and lo < end <= hi:
        return Placement.ENDS_INSIDE
    if start < lo and end > hi:
        return Placement.SPANS
    return Placement.OUTSIDE


def clip(annotation: Annotation, lo: int, hi: int) -> Annotation | None:
    """Return *annotation* clipped and re-based to ``[lo, hi)``, or None if it
    contributes nothing to that window."""
    placement = classify(annotation, lo, hi)

    if placement is Placement.INSIDE:
        offset, length = annotation.offset - lo, annotation.length
    elif placement is Placement.STARTS_INSIDE:
        offset, length = annotation.offset - lo, min(annotation.length, hi - annotation.offset)
    elif placement is Placement.ENDS_INSIDE:
        offset, length = 0, annotation.end - lo
    elif placement is Placement.SPANS:
        offset, length = 0, hi - lo
    else:
        return None

    return Annotation(kind=annotation.kind, offset=offset, length=length)


def clip_all(annotations: list[Annotation], lo: int, hi: int) -> list[Annotation]:
    """Clip every annotation to ``[lo, hi)``, keeping input order."""
    result = []
    for annotation in annotations:
        clipped = clip(annotation, lo, hi)
        if clipped is not None:
            result.append(clipped)
    return result
