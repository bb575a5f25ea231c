"""Client library for the Music Player Daemon protocol: connection, reply parsing and queries."""

__version__ = "0.1.0"
__all__ = ["client", "errors", "parsing", "protocol", "query", "responses", "status", "version"]