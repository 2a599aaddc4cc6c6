"""CLI layer for washbook application."""
