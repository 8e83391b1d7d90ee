"""Building blocks for an HTTP server: request parsing, response writing, routing, caching, storage, pools and logging."""

__version__ = "0.1.0"