"""Verification configuration.

Provides a single frozen dataclass that encapsulates the knobs a caller may
tune before loading an RDLT: the vertex cap guarding exponential enumeration
and the attribute/identifier conventions of the input.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from rdltverify.constants import CYCLE_ID_PREFIX, EPSILON, MAX_VERTICES

__all__ = ["VerificationConfig"]


@dataclass(frozen=True, slots=True)
class VerificationConfig:
    """Immutable configuration for loading and verifying an RDLT.

    Constructing ``VerificationConfig()`` with no arguments produces the
    defaults used by the module-level operations.

    Attributes:
        max_vertices: Maximum number of distinct vertices accepted by
            ``load()``. The default ``0`` disables the cap.
        epsilon: c-attribute value treated as unconstrained (default: "ε").
        cycle_id_prefix: Prefix for sequential cycle ids (default: "c-").

    Example:
        >>> from rdltverify import VerificationSession
        >>> config = VerificationConfig(max_vertices=32)
        >>> session = VerificationSession(config=config)
        >>> session.config.max_vertices
        32
    """

    max_vertices: int = MAX_VERTICES
    epsilon: str = EPSILON
    cycle_id_prefix: str = CYCLE_ID_PREFIX

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If max_vertices is negative, or epsilon or
                cycle_id_prefix is empty.
        """
        if self.max_vertices < 0:
            msg = "max_vertices must be non-negative"
            raise ValueError(msg)
        if not self.epsilon:
            msg = "epsilon must be a non-empty string"
            raise ValueError(msg)
        if not self.cycle_id_prefix:
            msg = "cycle_id_prefix must be a non-empty string"
            raise ValueError(msg)
