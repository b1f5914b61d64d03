"""Adapters turning one export format into intermediate records."""
