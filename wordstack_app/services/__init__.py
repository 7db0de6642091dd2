"""Cross-module services."""
