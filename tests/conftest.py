"""Make ``import termedit`` resolve to this checkout under the pytest script.

The console script may start with a sys.path that lacks the project root,
for example when the package is not installed in editable mode.
"""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = str(Path(__file__).resolve().parents[1])

if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
