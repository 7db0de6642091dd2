"""Feature modules of WordStack."""
