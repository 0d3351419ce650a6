"""Entry point: python -m skillsync"""

from __future__ import annotations

from skillsync.cli import run

if __name__ == "__main__":
    run()
