"""Version information for neo-policy-cache."""

__version__ = "0.1.0"
