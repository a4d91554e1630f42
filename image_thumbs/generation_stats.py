"""
GenerationStats - Statistics for a generation run.
"""

import time
from dataclasses import dataclass, field
from typing import List


@dataclass
class GenerationStats:
    """
    Statistics for a generation run.

    Attributes:
        total_sources: Source images listed
        pruned: Sources skipped because all their thumbnails exist
        processed: Sources downloaded and processed
        uploaded: Thumbnails uploaded
        skipped: Thumbnails skipped because they already exist
        bytes_uploaded: Total bytes of thumbnails uploaded
        start_time: Start timestamp
        error_details: Error messages (at most one, runs stop on the first error)
    """
    total_sources: int = 0
    pruned: int = 0
    processed: int = 0
    uploaded: int = 0
    skipped: int = 0
    bytes_uploaded: int = 0
    start_time: float = field(default_factory=time.time)
    error_details: List[str] = field(default_factory=list)

    @property
    def errors(self) -> int:
        return len(self.error_details)

    @property
    def elapsed_seconds(self) -> float:
        """Elapsed time in seconds."""
        return time.time() - self.start_time

    @property
    def rate_per_minute(self) -> float:
        """Sources processed per minute."""
        elapsed = self.elapsed_seconds
        if elapsed > 0:
            return self.processed / elapsed * 60
        return 0.0

    @property
    def remaining_count(self) -> int:
        """Sources not yet processed or pruned."""
        return self.total_sources - self.pruned - self.processed
