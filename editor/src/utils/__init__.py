"""Geometry, text measurement and error reporting helpers."""
