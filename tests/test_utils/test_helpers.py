"""Тесты вспомогательных утилит."""

from __future__ import annotations

from pathlib import Path

from nasboard.utils.helpers import format_bytes, normalize_socket_path, sanitize_string
from nasboard.utils.paths import resolve_base_dir


def test_normalize_socket_path_adds_unix_prefix() -> None:
    assert normalize_socket_path("/var/run/docker.sock") == "unix:///var/run/docker.sock"


def test_normalize_socket_path_keeps_existing_scheme() -> None:
    assert normalize_socket_path("unix:///var/run/docker.sock") == "unix:///var/run/docker.sock"
    assert normalize_socket_path("tcp://127.0.0.1:2375") == "tcp://127.0.0.1:2375"
    assert normalize_socket_path("npipe:////./pipe/docker_engine") == "npipe:////./pipe/docker_engine"


def test_normalize_socket_path_keeps_relative_values() -> None:
    assert normalize_socket_path("custom-socket") == "custom-socket"


def test_sanitize_string_escapes_markup() -> None:
    assert sanitize_string("<b>\"Tom\" & 'Jerry'</b>") == (
        "&lt;b&gt;&quot;Tom&quot; &amp; &#x27;Jerry&#x27;&lt;/b&gt;"
    )


def test_format_bytes() -> None:
    assert format_bytes(0) == "0 B"
    assert format_bytes(512) == "512 B"
    assert format_bytes(1536) == "1.5 KB"
    assert format_bytes(1024 ** 3) == "1 GB"
    assert format_bytes(1024 ** 5) == "1024 TB"


def test_resolve_base_dir() -> None:
    assert resolve_base_dir({"NASBOARD_HOME": "/srv/nasboard"}) == Path("/srv/nasboard")
    assert resolve_base_dir({}) == Path.home() / ".nasboard"
