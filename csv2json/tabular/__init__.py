"""CSV input."""
