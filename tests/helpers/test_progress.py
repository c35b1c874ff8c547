"""Tests for progress bar helpers."""

import io

from rich.console import Console
from rich.progress import Progress

from src.helpers.progress import create_simple_progress, track_progress


class TestProgress:
    """Tests for progress helpers."""

    def test_create_simple_progress(self) -> None:
        """Test a Progress instance is created."""
        progress = create_simple_progress(Console(file=io.StringIO()))

        assert isinstance(progress, Progress)

    def test_track_progress_counts_updates(self) -> None:
        """Test the yielded task advances."""
        console = Console(file=io.StringIO())

        with track_progress("Slashing accounts", total=3, console=console) as (
            progress,
            task,
        ):
            for _ in range(3):
                progress.update(task, advance=1)

            assert progress.tasks[0].completed == 3
            assert progress.tasks[0].description == "Slashing accounts"

    def test_track_progress_disabled(self) -> None:
        """Test a disabled bar renders nothing."""
        output = io.StringIO()

        with track_progress(
            "Slashing accounts", total=0, console=Console(file=output), disable=True
        ):
            pass

        assert output.getvalue().strip() == ""
