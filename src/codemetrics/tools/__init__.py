"""Tool handlers. Each returns the text placed in a single text content block."""
