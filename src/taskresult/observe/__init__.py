"""Event emission and timing."""
