"""Example shop application."""
