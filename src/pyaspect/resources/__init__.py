"""Packaged resources for PyAspect (default configuration)."""
