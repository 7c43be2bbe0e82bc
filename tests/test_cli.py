"""CLI tests for scanning and browsing."""

import json
import os
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from mediacat.catalog import CatalogEntry
from mediacat.cli import cli
from mediacat.view import CatalogClient, FetchError, MemoryClipboard


def _env_with_home(tmp_path: Path) -> dict[str, Any]:
    env = dict(os.environ)
    env["HOME"] = str(tmp_path / "home")
    return env


def _media_dir(tmp_path: Path) -> Path:
    media = tmp_path / "Media"
    media.mkdir()
    for name in ("b.png", "a.PNG", "c.mp4", "notes.txt", "img10.jpg", "img2.jpg"):
        (media / name).write_bytes(b"")
    return media


def test_cli_help_displays_commands() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "Mediacat catalogs a media directory" in result.output
    for command in ("scan", "serve", "browse", "config"):
        assert command in result.output


def test_scan_json_lists_ordered_catalog(tmp_path: Path) -> None:
    media = _media_dir(tmp_path)
    runner = CliRunner()

    result = runner.invoke(cli, ["scan", str(media), "--json"], env=_env_with_home(tmp_path))

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert [item["name"] for item in payload["files"]] == [
        "a.PNG",
        "b.png",
        "c.mp4",
        "img2.jpg",
        "img10.jpg",
        "notes.txt",
    ]
    assert payload["stats"] == {"total": 6, "image": 4, "video": 1, "doc": 1, "other": 0}
    assert payload["filter"] == {"category": "all", "search": ""}


def test_scan_filters_do_not_change_stats(tmp_path: Path) -> None:
    media = _media_dir(tmp_path)
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["scan", str(media), "--json", "--type", "image", "--search", " IMG "],
        env=_env_with_home(tmp_path),
    )

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert [item["name"] for item in payload["files"]] == ["img2.jpg", "img10.jpg"]
    assert payload["stats"]["total"] == 6


def test_scan_table_output(tmp_path: Path) -> None:
    media = _media_dir(tmp_path)
    runner = CliRunner()

    result = runner.invoke(cli, ["scan", str(media)], env=_env_with_home(tmp_path))

    assert result.exit_code == 0
    assert "Total files" in result.output
    assert "notes.txt" in result.output
    assert "Document" in result.output


def test_scan_reports_no_results(tmp_path: Path) -> None:
    media = _media_dir(tmp_path)
    runner = CliRunner()

    result = runner.invoke(
        cli, ["scan", str(media), "--search", "xyz"], env=_env_with_home(tmp_path)
    )

    assert result.exit_code == 0
    assert "No files match" in result.output


def test_scan_missing_directory_fails(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli, ["scan", str(tmp_path / "absent"), "--json"], env=_env_with_home(tmp_path)
    )

    assert result.exit_code == 1
    assert "directory_unreadable" in result.output


def _entries() -> list[CatalogEntry]:
    return [
        CatalogEntry(name="a b.png", url="/Media/a%20b.png", type="image"),
        CatalogEntry(name="clip.mp4", url="/Media/clip.mp4", type="video"),
    ]


def test_browse_filters_and_copies_link(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    clipboard = MemoryClipboard()

    async def fake_fetch(self: CatalogClient) -> list[CatalogEntry]:
        return _entries()

    monkeypatch.setattr(CatalogClient, "fetch", fake_fetch)
    monkeypatch.setattr("mediacat.view.view.SystemClipboard", lambda: clipboard)
    runner = CliRunner()

    result = runner.invoke(
        cli,
        [
            "browse",
            "--url",
            "http://localhost:3000",
            "--type",
            "video",
            "--copy",
            "a b.png",
            "--json",
        ],
        env=_env_with_home(tmp_path),
    )

    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert [item["name"] for item in payload["files"]] == ["clip.mp4"]
    assert payload["stats"]["total"] == 2
    assert payload["copied"] == "http://localhost:3000/Media/a%20b.png"
    assert clipboard.text == payload["copied"]


def test_browse_unknown_copy_target(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    async def fake_fetch(self: CatalogClient) -> list[CatalogEntry]:
        return _entries()

    monkeypatch.setattr(CatalogClient, "fetch", fake_fetch)
    runner = CliRunner()

    result = runner.invoke(cli, ["browse", "--copy", "missing.png"], env=_env_with_home(tmp_path))

    assert result.exit_code != 0
    assert "missing.png" in result.output


def test_browse_fetch_failure_exits_nonzero(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    async def failing_fetch(self: CatalogClient) -> list[CatalogEntry]:
        raise FetchError("connection refused")

    monkeypatch.setattr(CatalogClient, "fetch", failing_fetch)
    runner = CliRunner()

    result = runner.invoke(cli, ["browse", "--json"], env=_env_with_home(tmp_path))

    assert result.exit_code == 1
    assert "fetch_failed" in result.output
    assert "Unable to fetch media files" in result.output


def test_serve_passes_overrides_to_app_and_uvicorn(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    media = _media_dir(tmp_path)
    created: list[Any] = []
    runs: list[dict[str, Any]] = []

    def fake_create_app(config: Any) -> str:
        created.append(config)
        return "app"

    def fake_run(app: Any, **kwargs: Any) -> None:
        runs.append({"app": app, **kwargs})

    monkeypatch.setattr("mediacat.api.create_app", fake_create_app)
    monkeypatch.setattr("uvicorn.run", fake_run)
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["serve", "--directory", str(media), "--host", "0.0.0.0", "--port", "8123"],
        env=_env_with_home(tmp_path),
    )

    assert result.exit_code == 0, result.output
    assert len(created) == 1
    config = created[0]
    assert config.media.directory == str(media)
    assert config.server.host == "0.0.0.0"
    assert config.server.port == 8123
    assert runs == [{"app": "app", "host": "0.0.0.0", "port": 8123, "log_level": "warning"}]
