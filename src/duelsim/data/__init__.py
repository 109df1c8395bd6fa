"""Data-layer helpers for bundled definition files."""
