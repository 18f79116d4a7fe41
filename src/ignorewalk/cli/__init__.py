"""Command-line interface for ignorewalk."""
