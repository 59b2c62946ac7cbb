"""Claude issue runner.

Turns a labelled GitHub issue into a generated markdown artifact, committed on
a branch with a pull request and a status comment on the issue.
"""

__version__ = "0.1.0"

from claude_issue_runner.runner.config import RunnerSettings

__all__ = ["__version__", "RunnerSettings"]
