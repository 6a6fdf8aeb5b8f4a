"""
Root conftest.py: make the project root importable so tests can reach both
the scheme_map package and the imgscheme CLI module without installing.
"""

import sys
from pathlib import Path

project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))
