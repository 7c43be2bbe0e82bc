"""Tests for the catalog HTTP endpoint."""

import logging
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from mediacat.api import CATALOG_ERROR_MESSAGE, create_app
from mediacat.catalog import CatalogScanner, DirectoryItem
from mediacat.config import MediacatConfig, resolve_with_precedence


def _config(directory: Path, **overrides: object) -> MediacatConfig:
    return resolve_with_precedence(
        defaults=MediacatConfig(),
        cli_overrides={"media.directory": str(directory), **overrides},
    )


def test_catalog_endpoint_returns_ordered_files(tmp_path: Path) -> None:
    for name in ("b.png", "a.PNG", "c.mp4", "notes.txt", "clip 2.webm"):
        (tmp_path / name).write_bytes(b"data")

    client = TestClient(create_app(_config(tmp_path)))
    response = client.get("/api/media")

    assert response.status_code == 200
    assert response.json() == {
        "files": [
            {"name": "a.PNG", "url": "/Media/a.PNG", "type": "image"},
            {"name": "b.png", "url": "/Media/b.png", "type": "image"},
            {"name": "c.mp4", "url": "/Media/c.mp4", "type": "video"},
            {"name": "clip 2.webm", "url": "/Media/clip%202.webm", "type": "video"},
            {"name": "notes.txt", "url": "/Media/notes.txt", "type": "doc"},
        ]
    }


def test_catalog_endpoint_empty_directory(tmp_path: Path) -> None:
    client = TestClient(create_app(_config(tmp_path)))

    response = client.get("/api/media")

    assert response.status_code == 200
    assert response.json() == {"files": []}


def test_catalog_endpoint_failure_hides_cause(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    missing = tmp_path / "nowhere"
    client = TestClient(create_app(_config(missing)))

    with caplog.at_level(logging.ERROR, logger="mediacat"):
        response = client.get("/api/media")

    assert response.status_code == 500
    assert response.json() == {"error": CATALOG_ERROR_MESSAGE}
    assert str(missing) not in response.text
    assert any(str(missing) in record.getMessage() for record in caplog.records)
    assert any(record.exc_info for record in caplog.records)


def test_catalog_endpoint_rescans_on_every_request(tmp_path: Path) -> None:
    client = TestClient(create_app(_config(tmp_path)))
    (tmp_path / "first.gif").write_bytes(b"gif")

    first = client.get("/api/media").json()
    (tmp_path / "second.gif").write_bytes(b"gif")
    second = client.get("/api/media").json()

    assert [item["name"] for item in first["files"]] == ["first.gif"]
    assert [item["name"] for item in second["files"]] == ["first.gif", "second.gif"]


def test_published_urls_resolve_to_file_bytes(tmp_path: Path) -> None:
    (tmp_path / "holiday photo #1.jpg").write_bytes(b"jpeg-bytes")
    client = TestClient(create_app(_config(tmp_path)))

    (entry,) = client.get("/api/media").json()["files"]
    response = client.get(entry["url"])

    assert response.status_code == 200
    assert response.content == b"jpeg-bytes"


def test_static_serving_can_be_disabled(tmp_path: Path) -> None:
    (tmp_path / "a.png").write_bytes(b"png")
    client = TestClient(create_app(_config(tmp_path, **{"server.serve_files": False})))

    response = client.get("/Media/a.png")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_custom_endpoint_path_and_injected_scanner(tmp_path: Path) -> None:
    scanner = CatalogScanner(
        lister=lambda _path: [DirectoryItem("v10.mkv"), DirectoryItem("v9.mkv")]
    )
    config = _config(tmp_path, **{"server.endpoint_path": "/catalog"})
    client = TestClient(create_app(config, scanner=scanner))

    response = client.get("/catalog")

    assert [item["name"] for item in response.json()["files"]] == ["v9.mkv", "v10.mkv"]
    assert client.get("/api/media").status_code == 404
