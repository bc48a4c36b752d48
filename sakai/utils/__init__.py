"""Small utilities shared across the application."""
