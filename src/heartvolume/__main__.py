"""Command-line entry point: ``python -m heartvolume``."""
import sys

from heartvolume.cli import main

if __name__ == "__main__":
    sys.exit(main())
