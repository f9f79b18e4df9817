"""Live status display for LTE modems driven over an AT command port."""

__version__ = "0.1.0"