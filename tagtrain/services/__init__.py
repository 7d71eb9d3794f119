"""Adapters for the external release tools (cargo, git-cliff, gh)."""
