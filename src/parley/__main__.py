"""parley CLI bootstrap."""

from __future__ import annotations

from parley.cli import app

if __name__ == "__main__":
    app()
