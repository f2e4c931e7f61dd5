"""Test suite package.

Puts the repository root on ``sys.path`` so ``movie_api`` and
``movie_client`` import from the working tree even when pytest is started
through its console script from another directory.
"""

from __future__ import annotations

import sys
from pathlib import Path

_REPO_ROOT: Path = Path(__file__).resolve().parent.parent


def _ensure_repo_on_path() -> None:
    """Insert the repository root at the front of ``sys.path`` when missing."""

    repo_root = str(_REPO_ROOT)
    if repo_root not in sys.path:
        sys.path.insert(0, repo_root)


_ensure_repo_on_path()
