"""Test helper that normalizes sys.path and environment defaults."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


_DEFAULT_ENV_VARS: dict[str, str] = {
    "OAUTH_CLIENT_ID": "test-client-id",
    "OAUTH_CLIENT_SECRET": "test-client-secret",
    "OAUTH_PROVIDER_BASE_URL": "https://provider.example/api/v2",
    "OAUTH_CALLBACK_DELAY": "0",
    "DATABASE_PATH": str(Path(tempfile.mkdtemp(prefix="dislike-tests-")) / "default.db"),
}

for key, value in _DEFAULT_ENV_VARS.items():
    os.environ.setdefault(key, value)
