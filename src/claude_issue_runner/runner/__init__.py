"""Single-shot issue runner components.

- Settings loaded from the environment / `.env`
- Event payload parsing and the label gate
- Provider calls with bounded retry
- Artifact, git publishing and GitHub notification steps
"""
