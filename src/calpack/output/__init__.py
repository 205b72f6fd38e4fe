"""Rendering of service results for the terminal or as JSON."""
