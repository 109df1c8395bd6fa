"""Presentation helpers for turning battle events into text."""
