from __future__ import annotations

import os

# Keep telemetry off the test runner's console.
os.environ.setdefault("CLITE_ENGINE_DISABLE_CONSOLE", "1")
os.environ.setdefault("CLITE_ENGINE_LOG_LEVEL", "WARNING")
