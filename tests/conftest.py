from __future__ import annotations

import sys
from pathlib import Path


def _ensure_paths() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

    # Test helpers (fakes.py) live next to the tests.
    tests_root = Path(__file__).resolve().parent
    if str(tests_root) not in sys.path:
        sys.path.insert(0, str(tests_root))


_ensure_paths()
