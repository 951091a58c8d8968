"""Smart-album rules and user tags for the photo library backend."""

__version__ = "0.1.0"
