"""Shared pytest configuration for the StepWalk test suite."""

import sys
from pathlib import Path

# Add parent directory to path for imports when the package is not installed
sys.path.insert(0, str(Path(__file__).parent.parent))
