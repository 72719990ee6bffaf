"""
Long Multiplication Calculator - Module Entry Point

Use either:
  - python run.py [command] [options]
  - python -m long_multiplication [command] [options]

Both are equivalent.
"""

from .cli import main

if __name__ == "__main__":
    main()
