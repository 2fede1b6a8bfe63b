"""
Import workflow state enumeration.

This module defines the states of a file import and the legal moves between them.
"""

from enum import StrEnum


class ImportState(StrEnum):
    """
    States of a trade file import.

    idle -> validating -> preview_ready | mapping_required
    mapping_required -> mapping_confirmed -> preview_ready
    preview_ready -> confirmed -> merged

    Any state before confirmed may move to cancelled.
    """

    IDLE = "idle"
    VALIDATING = "validating"
    MAPPING_REQUIRED = "mapping_required"
    MAPPING_CONFIRMED = "mapping_confirmed"
    PREVIEW_READY = "preview_ready"
    CONFIRMED = "confirmed"
    MERGED = "merged"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        """Check if no further transition is possible."""
        return self in (self.MERGED, self.CANCELLED)

    @property
    def is_cancellable(self) -> bool:
        """Check if the import can still be abandoned."""
        return self not in (self.CONFIRMED, self.MERGED, self.CANCELLED)

    def can_transition_to(self, target: "ImportState") -> bool:
        """Check if moving to target is a legal transition."""
        if target == ImportState.CANCELLED:
            return self.is_cancellable
        return target in _TRANSITIONS[self]


_TRANSITIONS: dict[ImportState, frozenset[ImportState]] = {
    ImportState.IDLE: frozenset({ImportState.VALIDATING}),
    ImportState.VALIDATING: frozenset({ImportState.PREVIEW_READY, ImportState.MAPPING_REQUIRED}),
    ImportState.MAPPING_REQUIRED: frozenset({ImportState.MAPPING_CONFIRMED}),
    # A confirmed mapping that yields no rows sends the user back to mapping
    ImportState.MAPPING_CONFIRMED: frozenset(
        {ImportState.PREVIEW_READY, ImportState.MAPPING_REQUIRED}
    ),
    ImportState.PREVIEW_READY: frozenset({ImportState.CONFIRMED}),
    ImportState.CONFIRMED: frozenset({ImportState.MERGED}),
    ImportState.MERGED: frozenset(),
    ImportState.CANCELLED: frozenset(),
}
