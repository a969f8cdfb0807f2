"""
Tests for computation contexts
"""

import pytest

from anonymization_quality.context import ComputationContext, ComputationInterruptedError


class TestComputationContext:
    """
    Tests for cancellation and progress.
    """

    def test_progress_is_monotonic(self):
        """Tests that progress never decreases and the callback sees each increase once."""
        reported = []
        context = ComputationContext(progress_callback=reported.append)
        context.report(10)
        context.report(5)
        context.report(10)
        context.report(30)

        assert context.progress == 30
        assert reported == [10, 30], f"{reported} != [10, 30]"

    def test_progress_out_of_range(self):
        """Tests that progress must be a percentage."""
        context = ComputationContext()
        with pytest.raises(ValueError):
            context.report(101)
        with pytest.raises(ValueError):
            context.report(-1)

    def test_cancel(self):
        """Tests that check_interrupt raises once cancel was called."""
        context = ComputationContext()
        context.check_interrupt()
        assert not context.is_cancelled()

        context.cancel()
        assert context.is_cancelled()
        with pytest.raises(ComputationInterruptedError):
            context.check_interrupt()
