"""I/O adapters: HTTP API and outbound email."""
