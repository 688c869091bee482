"""Bundled default property files."""
