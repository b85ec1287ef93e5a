"""Split annotated text into length-limited chunks.

Two call patterns share the same clipping and capping logic:

* :func:`segment` takes a complete text with its annotations.
* :class:`MessageWriter` accumulates labeled segments and cuts a chunk every
  time the next write would overflow the length limit.

Once ``max_chunk_count`` chunks exist, further text is dropped and the result
is marked ``truncated``. That is a policy, not an error.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from loguru import logger

from teleshell.segment.boundary import clip, clip_all
from teleshell.segment.limits import LimitPolicy
from teleshell.segment.model import Annotation, Chunk, Segment
from teleshell.segment.units import CodeUnits


@dataclass
class Segmentation:
    """Chunks produced for one message, plus whether text was dropped."""

    chunks: list[Chunk] = field(default_factory=list)
    truncated: bool = False

    def __iter__(self) -> Iterator[Chunk]:
        return iter(self.chunks)

    def __len__(self) -> int:
        return len(self.chunks)

    def __getitem__(self, index: int) -> Chunk:
        return self.chunks[index]


class _ChunkCollector:
    """Append chunks until the count cap, then record truncation."""

    def __init__(self, limits: LimitPolicy):
        self.limits = limits
        self.chunks: list[Chunk] = []
        self.truncated = False

    @property
    def full(self) -> bool:
        return len(self.chunks) >= self.limits.max_chunk_count

    def emit(self, text: str, annotations: list[Annotation]) -> bool:
        if self.full:
            if not self.truncated:
                logger.debug(f"Chunk limit ({self.limits.max_chunk_count}) reached, dropping remaining text")
            self.truncated = True
            return False
        self.chunks.append(Chunk(text=text, annotations=annotations))
        return True

    def result(self) -> Segmentation:
        return Segmentation(chunks=list(self.chunks), truncated=self.truncated)


# ---------------------------------------------------------------------------
# Batch mode
# ---------------------------------------------------------------------------

def segment(
    text: str,
    annotations: Iterable[Annotation] = (),
    limits: LimitPolicy | None = None,
) -> Segmentation:
    """Split *text* into windows of at most ``max_chunk_length`` code units.

    Every annotation is clipped to each window it touches. Raises
    :class:`~teleshell.segment.model.InvalidAnnotation` if any annotation
    falls outside *text*.
    """
    limits = limits or LimitPolicy()
    units = CodeUnits(text)
    total = len(units)

    annotations = list(annotations)
    for annotation in annotations:
        annotation.validate(total)

    collector = _ChunkCollector(limits)
    lo = 0
    while lo < total:
        hi = units.safe_cut(min(lo + limits.max_chunk_length, total))
        if not collector.emit(units.slice(lo, hi), clip_all(annotations, lo, hi)):
            break
        lo = hi

    return collector.result()


# ---------------------------------------------------------------------------
# Incremental mode
# ---------------------------------------------------------------------------

class MessageWriter:
    """
    Build a message from labeled segments, cutting chunks as it goes.

    One writer belongs to one outgoing message and must not be shared
    between tasks. Call :meth:`messages` once all segments are written.
    """

    def __init__(self, limits: LimitPolicy | None = None):
        self.limits = limits or LimitPolicy()
        self._collector = _ChunkCollector(self.limits)
        self._parts: list[str] = []
        self._annotations: list[Annotation] = []
        self._buffer_length = 0
        self._finalized = False

    @property
    def truncated(self) -> bool:
        return self._collector.truncated

    def write(self, text: str, kind: str | None = None) -> None:
        """Append *text*, annotated as *kind* unless kind is None."""
        if self._finalized:
            raise RuntimeError("MessageWriter already finalized; use a new writer per message")

        units = CodeUnits(text)
        pos, total = 0, len(units)
        max_length = self.limits.max_chunk_length

        while pos < total:
            room = max_length - self._buffer_length
            if total - pos <= room:
                self._append(units.slice(pos, total), total - pos, kind)
                return

            cut = units.safe_cut(pos + room)
            if cut > pos:
                filled = self._buffer_length + (cut - pos)
                annotation = None
                if kind:
                    # The rest of the segment, placed in buffer coordinates,
                    # clipped at the edge of the chunk being completed.
                    pending = Annotation(kind=kind, offset=self._buffer_length, length=total - pos)
                    annotation = clip(pending, 0, filled)
                self._parts.append(units.slice(pos, cut))
                if annotation is not None:
                    self._annotations.append(annotation)
                self._buffer_length = filled
            self._flush()
            pos = cut

    def write_segment(self, segment: Segment) -> None:
        self.write(segment.text, segment.kind)

    def messages(self) -> list[Chunk]:
        """Flush the remaining buffer and return every chunk written so far."""
        if not self._finalized:
            self._flush()
            self._finalized = True
        return list(self._collector.chunks)

    def segmentation(self) -> Segmentation:
        self.messages()
        return self._collector.result()

    def _append(self, text: str, length: int, kind: str | None) -> None:
        if kind and length > 0:
            self._annotations.append(Annotation(kind=kind, offset=self._buffer_length, length=length))
        self._parts.append(text)
        self._buffer_length += length

    def _flush(self) -> None:
        if not self._parts:
            return
        self._collector.emit("".join(self._parts), self._annotations)
        self._parts = []
        self._annotations = []
        self._buffer_length = 0
