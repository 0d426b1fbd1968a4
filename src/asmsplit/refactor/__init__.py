"""Module-level edits on assembly listings."""
