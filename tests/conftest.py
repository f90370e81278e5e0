"""Pytest configuration for the rdltverify test suite.

Single Source of Truth for Hypothesis max_examples:
- dev: Local development with 200 examples (thorough property testing)
- ci: CI runs with 50 examples (fast feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- CI=true environment variable -> "ci" profile
- HYPOTHESIS_PROFILE env var -> explicit override
- Otherwise -> "dev" profile (local development)

Override manually: HYPOTHESIS_PROFILE=verbose pytest tests/
"""

import os

import pytest
from hypothesis import HealthCheck, Phase, Verbosity, settings

from tests.helpers.arcs import make_arc

# =============================================================================
# HYPOTHESIS PROFILES - SINGLE SOURCE OF TRUTH
# =============================================================================

# Path enumeration is exponential; keep generated graphs small and examples
# bounded so the suite stays fast.
settings.register_profile(
    "dev",
    max_examples=200,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    suppress_health_check=[HealthCheck.too_slow],
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
    suppress_health_check=[HealthCheck.too_slow],
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


# =============================================================================
# AUTO-DETECT EXECUTION CONTEXT
# =============================================================================


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context.

    Priority:
    1. HYPOTHESIS_PROFILE env var (explicit override)
    2. CI=true env var
    3. Default to "dev" (local development)
    """
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit

    if os.environ.get("CI") == "true":
        return "ci"

    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# SHARED FIXTURES
# =============================================================================


@pytest.fixture
def triangle_arcs() -> list[dict[str, str]]:
    """x1 -> x2 -> x3 -> x1 with levels 1, 2, 1."""
    return [
        make_arc("r-1", "x1", "x2", "ε", "1"),
        make_arc("r-2", "x2", "x3", "a", "2"),
        make_arc("r-3", "x3", "x1", "ε", "1"),
    ]


@pytest.fixture
def free_choice_arcs() -> list[dict[str, str]]:
    """Source s, siblings x and y sharing parents {a, b}, joined again at t."""
    return [
        make_arc("r-1", "s", "a"),
        make_arc("r-2", "s", "b"),
        make_arc("r-3", "a", "x", "c1"),
        make_arc("r-4", "b", "x", "c2"),
        make_arc("r-5", "a", "y", "c3"),
        make_arc("r-6", "b", "y", "c4"),
        make_arc("r-7", "x", "t"),
        make_arc("r-8", "y", "t"),
    ]


@pytest.fixture
def unreachable_siblings_arcs() -> list[dict[str, str]]:
    """Siblings x, y fed by a component the source s cannot reach."""
    return [
        make_arc("r-1", "s", "t"),
        make_arc("r-2", "u", "p"),
        make_arc("r-3", "u", "q"),
        make_arc("r-4", "p", "x", "a"),
        make_arc("r-5", "q", "x", "b"),
        make_arc("r-6", "p", "y", "c"),
        make_arc("r-7", "q", "y", "d"),
    ]
