"""Command-line presentation layer for the RoAI engine."""
