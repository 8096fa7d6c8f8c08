"""
DerivationStats - Statistics for the asset derivation stage of a build.
"""

import time
from dataclasses import dataclass, field
from typing import List


@dataclass
class DerivationStats:
    """
    Statistics for derived assets (thumbnails and split halves).

    Attributes:
        submitted: Derivation tasks handed to the worker pool
        generated: Tasks that wrote their output successfully
        fresh: Derivations skipped because outputs were up to date
        errors: Tasks that failed
        start_time: Start timestamp
        error_details: List of error messages
    """
    submitted: int = 0
    generated: int = 0
    fresh: int = 0
    errors: int = 0
    start_time: float = field(default_factory=time.time)
    error_details: List[str] = field(default_factory=list)

    @property
    def elapsed_seconds(self) -> float:
        """Elapsed time in seconds."""
        return time.time() - self.start_time

    @property
    def rate_per_second(self) -> float:
        """Generation rate in assets per second."""
        if self.elapsed_seconds > 0:
            return self.generated / self.elapsed_seconds
        return 0.0

    @property
    def completed_count(self) -> int:
        """Tasks that have finished, successfully or not."""
        return self.generated + self.errors

    @property
    def pending_count(self) -> int:
        """Tasks submitted but not yet finished."""
        return self.submitted - self.completed_count

    def to_dict(self) -> dict:
        return {
            'submitted': self.submitted,
            'generated': self.generated,
            'fresh': self.fresh,
            'errors': self.errors,
            'elapsed_seconds': round(self.elapsed_seconds, 3),
        }
