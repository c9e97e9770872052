"""Unpack WALL-E game objects to JSON and companion files, and pack them back."""

__version__ = "0.1.0"