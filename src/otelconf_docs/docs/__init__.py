"""Markdown generation and marker-based synchronization into a docs repository."""
