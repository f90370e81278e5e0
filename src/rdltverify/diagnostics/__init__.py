"""Diagnostic system for RDLT verification.

Provides the exception hierarchy, issue codes and the structured result
records returned by the verification phases.

Python 3.13+. Zero external dependencies.
"""

from .codes import IssueCode
from .errors import RDLTError, RDLTLimitError, RDLTStateError, RDLTStructureError
from .validation import (
    ParseIssue,
    Phase1Issue,
    Phase1Result,
    Phase2Result,
    VerificationReport,
    Violation,
)

__all__ = [
    "IssueCode",
    "ParseIssue",
    "Phase1Issue",
    "Phase1Result",
    "Phase2Result",
    "RDLTError",
    "RDLTLimitError",
    "RDLTStateError",
    "RDLTStructureError",
    "VerificationReport",
    "Violation",
]
