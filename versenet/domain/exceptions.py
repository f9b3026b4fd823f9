"""
Domain Exceptions
"""


class ComputationCancelled(RuntimeError):
    """Raised when a cancel event is set during a computation."""

    def __init__(self, phase: str, current: int = 0, total: int = 0):
        self.phase = phase
        self.current = current
        self.total = total
        super().__init__(f"{phase} cancelled at {current}/{total}")


class DatasetError(ValueError):
    """The verse dataset could not be read or has the wrong shape."""
