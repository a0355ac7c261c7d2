from __future__ import annotations

from pathlib import Path
from unittest.mock import Mock, patch

from csv2json.services.progress import ProgressTracker, is_tty_enabled


def test_is_tty_enabled_returns_stdout_isatty():
    with patch("sys.stdout.isatty", return_value=True):
        assert is_tty_enabled() is True
    with patch("sys.stdout.isatty", return_value=False):
        assert is_tty_enabled() is False


class TestProgressTracker:
    def test_init_with_tty_enabled(self):
        with patch("csv2json.services.progress.is_tty_enabled", return_value=True), \
             patch("csv2json.services.progress.tqdm") as mock_tqdm:
            tracker = ProgressTracker(3, description="Converting")

            assert tracker.enabled is True
            mock_tqdm.assert_called_once_with(
                total=3,
                desc="Converting",
                unit="file",
                disable=False,
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )

    def test_init_with_tty_disabled(self):
        with patch("csv2json.services.progress.is_tty_enabled", return_value=False):
            tracker = ProgressTracker(3)
            assert tracker.enabled is False
            assert tracker.pbar is None
            tracker.start_file(Path("a.csv"))
            tracker.finish_file()
            tracker.set_postfix(success=1)
            tracker.close()
            assert tracker.current_file == 1

    def test_file_lifecycle_updates_bar(self):
        mock_pbar = Mock()
        with patch("csv2json.services.progress.is_tty_enabled", return_value=True), \
             patch("csv2json.services.progress.tqdm", return_value=mock_pbar):
            with ProgressTracker(1, description="Converting") as tracker:
                tracker.start_file(Path("input/goblins.csv"))
                mock_pbar.set_description.assert_called_with("Converting (goblins.csv)")
                tracker.finish_file(success=True)
                mock_pbar.update.assert_called_once_with(1)
                tracker.set_postfix(success=1, failed=0)
                mock_pbar.set_postfix.assert_called_once_with(success=1, failed=0)
            mock_pbar.close.assert_called_once()
            assert tracker.pbar is None
