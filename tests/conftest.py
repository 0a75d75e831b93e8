"""Pytest configuration for csapi test suite."""

import sys
from pathlib import Path

# Add project directory to path for csapi imports
sys.path.insert(0, str(Path(__file__).parent.parent))
