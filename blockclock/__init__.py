"""Screen layouts for a multi-panel Bitcoin display and a QR Code encoder."""

__version__ = "0.1.0"