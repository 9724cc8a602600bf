"""Helpers for instant-messaging services: collections, IDs, encryption, retries and time."""

__version__ = "0.1.0"