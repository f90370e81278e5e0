"""Builders for raw arc records used across the test suite."""


def make_arc(
    r_id: str,
    start: str,
    end: str,
    c: str = "ε",
    level: str | None = "1",
) -> dict[str, str]:
    """Build a raw arc record in the ingestion format."""
    record = {"r-id": r_id, "arc": f"{start}, {end}", "c-attribute": c}
    if level is not None:
        record["l-attribute"] = level
    return record
