"""Shared library utilities: errors and logging."""
