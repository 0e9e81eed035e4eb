from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Iterable

import httpx
import pytest

# Load dotenv files early so test fixtures can read settings via os.getenv
try:  # pragma: no cover
    from dotenv import load_dotenv

    TEST_ROOT = Path(__file__).resolve().parent
    load_dotenv(TEST_ROOT / ".env", override=False)
except ImportError:
    pass

# Settings are read once at import time, so the test environment must be in
# place before anything imports ``readcycle``.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["READCYCLE_AUTO_CREATE_TABLES"] = "false"
os.environ["READCYCLE_MAIL_ENABLED"] = "false"
os.environ["LOGFIRE_ENABLED"] = "false"
os.environ.setdefault("READCYCLE_UPLOAD_DIR", tempfile.mkdtemp(prefix="readcycle-upload-"))


@pytest.fixture(autouse=True)
def _global_offline_http_guard(monkeypatch: pytest.MonkeyPatch):
    allowed_prefixes: Iterable[str] = (
        "http://mock",
        "https://mock",
        "http://localhost",
        "http://127.0.0.1",
        "http://0.0.0.0",
        "/",  # Allow relative paths (used by ASGI transport)
    )

    orig_sync = httpx._client.Client.request
    orig_async = httpx._client.AsyncClient.request

    def _is_allowed(url_str: str) -> bool:
        return any(url_str.startswith(p) for p in allowed_prefixes)

    def offline_sync(self, method, url, *args, **kwargs):
        url_str = str(url)
        if _is_allowed(url_str):
            return orig_sync(self, method, url, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard: {url_str}")

    async def offline_async(self, method, url, *args, **kwargs):
        url_str = str(url)
        if _is_allowed(url_str):
            return await orig_async(self, method, url, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard (async): {url_str}")

    monkeypatch.setattr(httpx._client.Client, "request", offline_sync, raising=True)
    monkeypatch.setattr(httpx._client.AsyncClient, "request", offline_async, raising=True)
