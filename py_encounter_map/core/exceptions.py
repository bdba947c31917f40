"""Custom exceptions for encounter map generation."""


class EncounterMapError(Exception):
    """Base exception for encounter map errors."""

    pass


class PlacementExhausted(EncounterMapError):
    """Raised when a range could not place all of its features within its scan budget."""

    def __init__(self, result):
        self.result = result
        super().__init__(
            f"Placed {result.placed} of {result.requested} range features "
            f"after {result.scans} scans"
        )
