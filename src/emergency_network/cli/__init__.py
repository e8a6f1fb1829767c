"""CLI command groups for Emergency Network."""
