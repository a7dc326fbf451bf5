"""Boundary adapters for external providers."""
