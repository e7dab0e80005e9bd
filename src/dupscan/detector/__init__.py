"""Size, checksum and byte passes plus the pipeline that runs them."""
