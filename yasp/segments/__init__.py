"""Segment models and the owned segment list."""

from yasp.segments.models import Clock, Segment, SegmentKind, SegmentList, Sentinel

__all__ = ["Clock", "Segment", "SegmentKind", "SegmentList", "Sentinel"]
