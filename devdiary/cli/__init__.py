"""Command-line interface for DevDiary."""
