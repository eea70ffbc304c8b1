"""Data models."""
from .upload import UploadFile

__all__ = ["UploadFile"]
