"""
Pytest configuration.

Puts the repository root on sys.path so the dirflag package is importable
from a plain checkout, without installation.
"""

import sys
from pathlib import Path

root = Path(__file__).parent
if str(root) not in sys.path:
    sys.path.insert(0, str(root))
