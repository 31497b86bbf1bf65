"""Agent registry commands."""
