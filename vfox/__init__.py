"""Building blocks of an SDK version manager: configuration, caching, environment and PATH handling, checksums, plugin hook data, Lua-style tables and upgrade lookups."""

__version__ = "0.1.0"