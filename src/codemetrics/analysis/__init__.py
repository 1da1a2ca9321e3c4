"""Per-file metrics."""
