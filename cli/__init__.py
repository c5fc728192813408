"""Command-line interface for linkscout."""
