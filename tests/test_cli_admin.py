"""Tests for admin CLI commands."""

from unittest.mock import patch

from typer.testing import CliRunner

from ecf_insight.cli import app
from ecf_insight.utils.cache import ContentCache

runner = CliRunner()


def _filled_cache(tmp_path, entries=3):
    cache = ContentCache(cache_dir=tmp_path / "cache", enabled=True)
    for i in range(entries):
        cache.set(f"ecf_route_{i}", {"games": [i]})
    return cache


def test_cache_stats(tmp_path):
    cache = _filled_cache(tmp_path)

    with patch("ecf_insight.cli.admin.ContentCache", return_value=cache):
        result = runner.invoke(app, ["admin", "cache-stats"])

    assert result.exit_code == 0
    assert "Entries: 3" in result.output


def test_cache_clear_with_yes(tmp_path):
    cache = _filled_cache(tmp_path)

    with patch("ecf_insight.cli.admin.ContentCache", return_value=cache):
        result = runner.invoke(app, ["admin", "cache-clear", "--yes"])

    assert result.exit_code == 0
    assert "[OK] Removed 3" in result.output
    assert cache.stats()["files"] == 0


def test_cache_clear_aborted(tmp_path):
    cache = _filled_cache(tmp_path)

    with patch("ecf_insight.cli.admin.ContentCache", return_value=cache):
        result = runner.invoke(app, ["admin", "cache-clear"], input="n\n")

    assert result.exit_code == 1
    assert cache.stats()["files"] == 3


def test_cache_clear_failure(tmp_path):
    cache = _filled_cache(tmp_path)

    with (
        patch("ecf_insight.cli.admin.ContentCache", return_value=cache),
        patch.object(cache, "clear", side_effect=OSError("read-only file system")),
    ):
        result = runner.invoke(app, ["admin", "cache-clear", "-y"])

    assert result.exit_code == 1
    assert "FAIL" in result.output


def test_show_config(sample_settings):
    with patch("ecf_insight.cli.admin.get_settings", return_value=sample_settings):
        result = runner.invoke(app, ["admin", "show-config"])

    assert result.exit_code == 0
    assert "ecf_api_base_url: https://rating.englishchess.org.uk/v2/new/api.php" in result.output
    assert "log_level: DEBUG" in result.output
