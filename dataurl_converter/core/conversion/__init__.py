"""Image conversion pipeline components."""
