"""Rule repository commands."""
