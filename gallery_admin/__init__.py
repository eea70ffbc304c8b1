"""Admin client for the gallery's media library."""

__version__ = "0.3.0"
