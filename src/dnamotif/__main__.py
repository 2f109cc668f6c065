"""
--------------------------------------------------------------------------------
dnamotif
src/dnamotif/__main__.py

dnamotif CLI module entrypoint.

Module Author(s): Eric J. South
--------------------------------------------------------------------------------
"""

from __future__ import annotations

from .cli import app

if __name__ == "__main__":
    app()
