"""Domain models for monolive.

This package contains the core data structures and enumerations used
throughout the system. All models use Pydantic v2 for validation.
"""

from monolive.domain.models import (
    BackendKind,
    Frame,
    LoopState,
    NormalizationPolicy,
    RunSummary,
    StopReason,
)

__all__ = [
    "BackendKind",
    "Frame",
    "LoopState",
    "NormalizationPolicy",
    "RunSummary",
    "StopReason",
]
