"""Directory walking and bucket indexes."""
