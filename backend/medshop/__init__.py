"""Inventory and sales core for a small pharmacy."""

__version__ = "0.1.0"
