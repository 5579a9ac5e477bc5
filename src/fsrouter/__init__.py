"""Filesystem-driven route registration generator for gorilla/mux."""

__version__ = "0.1.0"
