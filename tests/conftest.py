from __future__ import annotations

import os
from typing import Final

_TEST_ENV_VARS: Final[dict[str, str]] = {
    "APP_ENV": "test",
    "LOG_LEVEL": "DEBUG",
}

for key, value in _TEST_ENV_VARS.items():
    os.environ.setdefault(key, value)
