"""Tests for GenerationStats class."""

import time
import pytest
from image_thumbs.generation_stats import GenerationStats


class TestGenerationStats:
    """Tests for GenerationStats class."""

    def test_defaults(self):
        """Test a new run starts empty."""
        stats = GenerationStats()

        assert stats.processed == 0
        assert stats.errors == 0
        assert stats.error_details == []

    def test_elapsed_seconds(self):
        """Test elapsed time calculation."""
        stats = GenerationStats()
        stats.start_time = time.time() - 10

        assert stats.elapsed_seconds >= 10
        assert stats.elapsed_seconds < 12

    def test_rate_per_minute(self):
        """Test rate per minute."""
        stats = GenerationStats()
        stats.start_time = time.time() - 60
        stats.processed = 100

        rate = stats.rate_per_minute

        assert rate >= 90
        assert rate <= 110

    def test_errors(self):
        """Test error count follows error details."""
        stats = GenerationStats()
        stats.error_details.append('Error processing a.jpg: boom')

        assert stats.errors == 1

    def test_remaining_count(self):
        """Test remaining count."""
        stats = GenerationStats(total_sources=100)
        stats.pruned = 10
        stats.processed = 50

        assert stats.remaining_count == 40
