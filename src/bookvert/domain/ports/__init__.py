"""Domain port definitions for adapters."""

from __future__ import annotations

from .archiving import ArchiveBuilder, BuildOutcome, BuildReport
from .interaction import Operator, OperatorChoice, OperatorSignal
from .scanning import CandidateScanner

__all__ = [
    "ArchiveBuilder",
    "BuildOutcome",
    "BuildReport",
    "CandidateScanner",
    "Operator",
    "OperatorChoice",
    "OperatorSignal",
]
