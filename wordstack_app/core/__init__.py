"""Core infrastructure for the WordStack application."""
