"""Command-line interface for ledgerly."""
