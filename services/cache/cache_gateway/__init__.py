"""Cache Gateway: HTTP front for a Redis key-value cache."""
