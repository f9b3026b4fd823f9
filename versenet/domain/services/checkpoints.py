"""
Progress and cancellation checkpoints shared by the engines.

Engines call ``checkpoint`` at every sample / node-visit boundary. It
raises ComputationCancelled when the cancel event is set and forwards
progress to the callback every ``interval`` steps.
"""

import threading
from typing import Callable, Optional

from versenet.domain.exceptions import ComputationCancelled

# callback(phase, current, total)
ProgressCallback = Callable[[str, int, int], None]


def checkpoint(
    phase: str,
    current: int,
    total: int,
    interval: int,
    progress_callback: Optional[ProgressCallback] = None,
    cancel_event: Optional[threading.Event] = None,
) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise ComputationCancelled(phase, current, total)
    if progress_callback and current % interval == 0:
        progress_callback(phase, current, total)


def require_positive(name: str, value: int) -> int:
    """Validate a count parameter at the API boundary."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value}")
    return value
