"""Constants used throughout the application."""

# Directory names pruned from every walk unless the caller supplies its own set.
# Entries are fnmatch patterns matched against the directory name only.
DEFAULT_IGNORE_DIRS = (
    ".git",
    ".venv",
    "venv",
    "node_modules",
    "__pycache__",
    ".idea",
    ".vscode",
    ".cache",
    ".cargo",
    ".config",
    ".docker",
    ".local",
    ".rustup",
    ".themes",
    "target",
    "go",
    "build",
    "dist",
    "vendor",
)

# Hasher pool
DEFAULT_MAX_WORKERS = 30  # simultaneously open files / in-flight hashes
DEFAULT_HASH_ALGORITHM = "sha256"
CHUNK_SIZE = 1024 * 1024  # bytes read per call while hashing or comparing

# Zero-byte files are never candidates
MIN_FILE_SIZE = 1

# Size index sharding
INDEX_SHARDS = 64

# Report
NO_DUPLICATES_MESSAGE = "All files are unique"
