"""Console script entrypoint.

The implementation lives in `claude_issue_runner.runner.main`.
"""

from __future__ import annotations

from claude_issue_runner.runner.main import main

__all__ = ["main"]


if __name__ == "__main__":
    raise SystemExit(main())
