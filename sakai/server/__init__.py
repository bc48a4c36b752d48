"""Litestar application: controllers, dependencies and plugins."""
