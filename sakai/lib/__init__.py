"""Shared helpers: settings, logging, media, metrics."""
