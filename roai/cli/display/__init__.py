"""Rich display components for CLI output."""
