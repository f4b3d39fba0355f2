"""Decode and inspect FIX protocol messages against a protocol dictionary."""

__version__ = "0.1.0"
