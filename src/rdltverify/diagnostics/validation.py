"""Structured results for RDLT parsing and verification.

Consolidates all feedback produced while checking an RDLT:
- Reader-level: Malformed input lines (ParseIssue)
- Phase 1: Missing or failing composite vectors (Phase1Issue)
- Phase 2: POS elements missing from an antecedent set (Violation)

All records are immutable; ``format()`` renders them for a text front end.

Python 3.13+.
"""

from dataclasses import dataclass

from rdltverify.constants import MSG_FREE_CHOICE
from rdltverify.diagnostics.codes import IssueCode
from rdltverify.enums import IssueSeverity, VerificationState
from rdltverify.model import CompositeVector, ConstraintMatrix

__all__ = [
    "ParseIssue",
    "Phase1Issue",
    "Phase1Result",
    "Phase2Result",
    "VerificationReport",
    "Violation",
]


# ============================================================================
# ISSUE & VIOLATION TYPES
# ============================================================================


# Maximum content length before truncation when sanitizing
_SANITIZE_MAX_CONTENT_LENGTH: int = 100


@dataclass(frozen=True, slots=True)
class ParseIssue:
    """Input line the reader could not turn into an arc record.

    Attributes:
        code: Issue code (e.g., "malformed-arc")
        message: Human-readable message
        content: The offending line
        line: 1-indexed line number in the source text
    """

    code: IssueCode
    message: str
    content: str
    line: int | None = None

    def format(self, *, sanitize: bool = False) -> str:
        """Format issue as human-readable string.

        Args:
            sanitize: If True, truncate content to 100 characters.

        Returns:
            Formatted issue string.
        """
        content_display = self.content
        if sanitize and len(content_display) > _SANITIZE_MAX_CONTENT_LENGTH:
            content_display = content_display[:_SANITIZE_MAX_CONTENT_LENGTH] + "..."

        location = f" at line {self.line}" if self.line is not None else ""
        return f"[{self.code}]{location}: {self.message} (content: {content_display!r})"


@dataclass(frozen=True, slots=True)
class Phase1Issue:
    """Structural issue found while building composite vectors.

    Attributes:
        code: Issue code
        message: Human-readable message
        severity: Issue severity (phase 1 issues are errors)
        vector: Name of the failing composite vector, if any
        matrix: Constraint matrix of the failing vector, if any
    """

    code: IssueCode
    message: str
    severity: IssueSeverity = IssueSeverity.ERROR
    vector: str | None = None
    matrix: ConstraintMatrix | None = None


@dataclass(frozen=True, slots=True)
class Violation:
    """A POS element that is missing from a sibling's antecedent set.

    Attributes:
        sibling_group: Retained members of the sibling group
        vertex: Member whose antecedent lacks the element
        missing_in_antecedent: The POS element not found
        pos_all: Union of POS sets over the group (snapshot)
        antecedent: antecedent(vertex) (snapshot)
    """

    sibling_group: tuple[str, ...]
    vertex: str
    missing_in_antecedent: str
    pos_all: tuple[str, ...]
    antecedent: tuple[str, ...]
    code: IssueCode = IssueCode.POS_NOT_IN_ANTECEDENT

    def format(self) -> str:
        return "\n".join(
            [
                f"Sibling Group: {', '.join(self.sibling_group)}",
                f"Vertex: {self.vertex}",
                f"Missing in Antecedent: {self.missing_in_antecedent}",
                f"Required POS: {', '.join(self.pos_all)}",
                f"Antecedent Set: {', '.join(self.antecedent)}",
            ]
        )


# ============================================================================
# PHASE RESULTS
# ============================================================================


@dataclass(frozen=True, slots=True)
class Phase1Result:
    """Outcome of composite-vector construction and constraint validation.

    Attributes:
        execution_time: Wall time of the phase in milliseconds
        valid: True iff at least one composite vector passed its matrix
        retained_vertices: Sorted union of siblings of valid vectors
        issues: One entry per absent or invalid composite vector
        valid_composite_vectors: Vectors that passed constraint checks
    """

    execution_time: float
    valid: bool
    retained_vertices: tuple[str, ...]
    issues: tuple[Phase1Issue, ...]
    valid_composite_vectors: tuple[CompositeVector, ...]

    @property
    def valid_vector_count(self) -> int:
        return len(self.valid_composite_vectors)

    def format(self) -> str:
        """Render the phase 1 summary, valid vectors and issues."""
        status = (
            "Constraints are valid. Proceeding to Phase 2."
            if self.valid
            else "Constraints are invalid. RDLT is not Σ-distinct PCS."
        )
        lines = [
            "Phase 1: Composite Vector Verification",
            f"Status: {status}",
            f"Valid Vectors: {self.valid_vector_count}",
            f"Retained Vertices: {', '.join(self.retained_vertices) or 'None'}",
        ]
        for vector in self.valid_composite_vectors:
            lines.append(f"  {vector.name}: [{', '.join(vector.siblings)}]")
        if self.issues:
            lines.append(f"Validation Issues ({len(self.issues)}):")
            for issue in self.issues:
                lines.append(f"  [{issue.code}]: {issue.message}")
        return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class Phase2Result:
    """Outcome of the Σ-distinct PCS free-choice check.

    Attributes:
        is_valid: True iff no violation was found and the phase ran
        message: Verdict message
        violations: Every failing (group, vertex, POS element) triple
        skipped: True when phase 1 produced no valid composite vector
    """

    is_valid: bool
    message: str
    violations: tuple[Violation, ...]
    skipped: bool = False

    @property
    def violation_count(self) -> int:
        return len(self.violations)

    def format(self) -> str:
        lines = ["Phase 2: Σ-distinct PCS Verification", f"Status: {self.message}"]
        if self.violations:
            lines.append(f"Constraint Violations ({self.violation_count}):")
            for violation in self.violations:
                lines.extend(f"  {line}" for line in violation.format().splitlines())
        return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class VerificationReport:
    """Combined verdict of a full verification run.

    Attributes:
        phase1: Phase 1 result
        phase2: Phase 2 result, None when phase 1 was invalid
        state: Final session state
        execution_time: Total wall time in milliseconds
    """

    phase1: Phase1Result
    phase2: Phase2Result | None
    state: VerificationState
    execution_time: float

    @property
    def is_free_choice(self) -> bool:
        """Final verdict: phase 1 valid and phase 2 free of violations."""
        return self.phase1.valid and self.phase2 is not None and self.phase2.is_valid

    def format(self) -> str:
        parts = [self.phase1.format()]
        if self.phase2 is None:
            parts.append("Phase 2 skipped: Phase 1 verification failed.")
        else:
            parts.append(self.phase2.format())
        verdict = MSG_FREE_CHOICE if self.is_free_choice else "RDLT is not Σ-distinct PCS free-choice."
        parts.append(f"Verdict: {verdict}")
        parts.append(f"Total Execution Time: {self.execution_time:.2f} ms")
        return "\n\n".join(parts)
