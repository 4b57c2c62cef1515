"""Allow running indexed as ``python -m indexed``."""

from indexed.cli import app

if __name__ == "__main__":
    app()
