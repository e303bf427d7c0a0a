"""Pytest bootstrap for local source imports.

Puts ``backend/`` (the ``repoprompt`` package) and ``frontend/`` (the
Streamlit script) on sys.path so the tests run without an installed copy.
"""

from __future__ import annotations

import sys
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parent.parent

for source_root in (PROJECT_ROOT / "backend", PROJECT_ROOT / "frontend"):
    source_root_str = str(source_root)
    if source_root_str not in sys.path:
        sys.path.insert(0, source_root_str)
