"""File and stream input helpers."""
