"""
Error types for the smart-input pipeline.

Classification never raises to callers: the fallback and date errors
below are raised and recovered inside the pipeline so the failure can
be logged by name. Only chip workflow misuse surfaces to the caller.
"""

from __future__ import annotations


class FallbackError(Exception):
    """Base class for generative fallback failures."""


class UpstreamUnavailable(FallbackError):
    """The model endpoint could not be reached or returned an error status."""


class MalformedFallbackResponse(FallbackError):
    """The model replied with something that is not a usable item list."""


class InvalidCalendarDate(ValueError):
    """A date expression named a day that does not exist (e.g. Feb 30)."""


class ChipWorkflowError(Exception):
    """Base class for chip state machine errors."""


class ChipNotFoundError(ChipWorkflowError):
    def __init__(self, chip_id: str) -> None:
        super().__init__(f"Chip not found: {chip_id}")
        self.chip_id = chip_id


class ChipTransitionError(ChipWorkflowError):
    def __init__(self, chip_id: str, status: str, action: str) -> None:
        super().__init__(f"Cannot {action} chip {chip_id} in status '{status}'")
        self.chip_id = chip_id
        self.status = status
        self.action = action
