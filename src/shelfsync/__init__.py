# ABOUTME: shelfsync - client-side synchronization for a remote book catalog.
# ABOUTME: Exposes the package version used in the HTTP User-Agent header.

__version__ = "0.1.0"
