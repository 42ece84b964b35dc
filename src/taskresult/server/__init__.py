"""Server modes."""
