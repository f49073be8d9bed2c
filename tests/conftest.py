"""
Pytest configuration.

Adds the project root to the Python path so tests run against the working tree even
without an editable install.
"""

import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
