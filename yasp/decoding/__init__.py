"""Decode orchestration over the external decoding engine."""

from yasp.decoding.engine import (
    AlignmentOutput,
    DecodingEngine,
    EngineFactory,
    PhoneRecord,
    WordRecord,
)
from yasp.decoding.orchestrator import DecodeOrchestrator, DecodeResult, DecodeState

__all__ = [
    "AlignmentOutput",
    "DecodeOrchestrator",
    "DecodeResult",
    "DecodeState",
    "DecodingEngine",
    "EngineFactory",
    "PhoneRecord",
    "WordRecord",
]
