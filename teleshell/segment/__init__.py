"""Chunking of annotated text into transport-sized messages."""

from teleshell.segment.boundary import Placement, classify, clip
from teleshell.segment.limits import LimitPolicy
from teleshell.segment.model import Annotation, Chunk, InvalidAnnotation, Segment
from teleshell.segment.segmenter import MessageWriter, Segmentation, segment
from teleshell.segment.units import code_unit_length

__all__ = [
    "Annotation",
    "Chunk",
    "InvalidAnnotation",
    "LimitPolicy",
    "MessageWriter",
    "Placement",
    "Segment",
    "Segmentation",
    "classify",
    "clip",
    "code_unit_length",
    "segment",
]
