"""Sockets, interface lookup, name resolution, polling, rate limiting and small utilities for STUN tools."""

__version__ = "0.1.0"