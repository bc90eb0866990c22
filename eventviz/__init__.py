"""Timed visual events animated by envelopes, fed by mapped control values and drawn to a recording canvas."""

__version__ = "0.1.0"