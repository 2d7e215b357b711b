"""Core constants: cache key prefixes and shared literal values."""

# Cache key prefixes (used as content:<op>:<kind>[:<arg>])
CACHE_PREFIX_CONTENT = "content"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"
