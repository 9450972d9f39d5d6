"""HTTP forwarding to the backend route groups."""

from .forwarder import BackendForwarder

__all__ = ["BackendForwarder"]
