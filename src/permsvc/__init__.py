"""Permissions service - grant storage and effective-permission resolution."""

__version__ = "0.1.0"
