"""LegalHub: locale-routed legal services directory backend."""

__version__ = "1.0.0"
