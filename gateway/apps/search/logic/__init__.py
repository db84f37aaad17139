"""Keeps the search index in step with public file metadata."""
