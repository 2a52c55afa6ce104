"""Pytest configuration.

The repository uses a flat layout without a required install step. This conftest ensures tests can
import from the `intent_relay.*` namespace when running `pytest` locally.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure `import intent_relay...` works when running pytest without installing the package.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))
