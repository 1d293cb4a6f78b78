"""Jinja templates for rendering graphs."""
