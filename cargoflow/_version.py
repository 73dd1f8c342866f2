"""Version information for cargoflow."""

__version__ = "0.3.0"
