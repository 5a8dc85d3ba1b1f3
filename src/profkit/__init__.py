"""profkit - profile configuration and authentication management."""

__version__ = "0.3.0"
