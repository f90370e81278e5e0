"""rdltverify exception hierarchy.

Only ingestion and session misuse raise. Every analysis outcome, including a
negative verdict, is returned as a structured result value.

Python 3.13+. Zero external dependencies.
"""


class RDLTError(Exception):
    """Base exception for all rdltverify errors."""


class RDLTStructureError(RDLTError, TypeError):
    """Top-level arc input is neither a sequence nor a map of sequences.

    Aborts snapshot construction. Individual malformed records do not raise;
    they are skipped and logged.
    """


class RDLTLimitError(RDLTError, ValueError):
    """Loaded graph exceeds the configured vertex cap.

    Attributes:
        vertex_count: Number of distinct vertices found
        limit: Configured maximum
    """

    def __init__(self, message: str, *, vertex_count: int = 0, limit: int = 0) -> None:
        """Initialize RDLTLimitError.

        Args:
            message: Error message
            vertex_count: Number of distinct vertices found
            limit: Configured maximum
        """
        super().__init__(message)
        self.vertex_count = vertex_count
        self.limit = limit


class RDLTStateError(RDLTError):
    """Session operation requested before any RDLT was loaded."""
