"""Machine-readable report rendering."""
