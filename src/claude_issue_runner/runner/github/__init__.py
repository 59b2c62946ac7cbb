"""GitHub API access for the runner."""
