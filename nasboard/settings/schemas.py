"""Дефолтная структура config.json."""

from __future__ import annotations

from typing import Any, Dict

CONFIG_VERSION = "1.0.0"

# DEFAULT_CONFIG служит шаблоном для начального config.json
DEFAULT_CONFIG: Dict[str, Any] = {
    "version": CONFIG_VERSION,
    "server": {
        "host": "0.0.0.0",
        "port": 3000,
        "cors_origins": [],
    },
    "logging": {
        "enabled": True,
        "level": "INFO",
        "max_file_size_mb": 10,
        "max_archived_files": 5,
    },
    "docker": {
        "in_container": None,
        "socket_path": "unix:///var/run/docker.sock",
        "named_pipe_path": "npipe:////./pipe/docker_engine",
        "fallback_host": "127.0.0.1",
        "fallback_port": 2375,
        "primary_timeout_sec": 5,
        "fallback_timeout_sec": 5,
        "stop_timeout_sec": 10,
        "stats_use_fallback": False,
    },
    "metrics": {
        "system_cache_ttl_sec": 5,
        "disk_path": "/",
    },
    "rate_limit": {
        "enabled": True,
        "max_requests": 100,
        "window_sec": 60,
    },
    "bookmarks": {
        "default_category": "default",
    },
}
