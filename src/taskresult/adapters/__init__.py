"""Adapters for platform services the engine delegates to."""
