"""ViewLint: semantic validation of XML view documents."""

__version__ = "0.1.0"
