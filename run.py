#!/usr/bin/env python3
"""Main CLI interface for the long multiplication calculator."""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from long_multiplication.cli import cli, main  # noqa: E402

if __name__ == "__main__":
    main()
