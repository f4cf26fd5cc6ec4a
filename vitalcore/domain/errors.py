"""Domain errors raised by the evaluation services."""

from vitalcore.domain.models import VitalsSnapshot


class InvalidInputError(ValueError):
    """Raised when a generator is invoked without a usable snapshot."""


def require_snapshot(snapshot: VitalsSnapshot | None, name: str) -> VitalsSnapshot:
    """Return ``snapshot`` unchanged, or raise ``InvalidInputError`` if it is unusable."""
    if snapshot is None:
        raise InvalidInputError(f"{name} snapshot is required")
    if not isinstance(snapshot, VitalsSnapshot):
        raise InvalidInputError(
            f"{name} must be a VitalsSnapshot, got {type(snapshot).__name__}"
        )
    return snapshot
