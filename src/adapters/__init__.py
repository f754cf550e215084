"""Adaptadores de I/O (HTTP, service bindings)."""
