"""Diagnostics and report formatting."""
