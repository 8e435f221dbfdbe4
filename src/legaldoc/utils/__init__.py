"""Internal helpers for legaldoc."""
