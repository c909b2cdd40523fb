"""Command-line interface for ThoughtCompletion."""
