"""Business logic layer for files app.

Ingestion, retrieval, visibility toggles and listings. Store handles are
passed in explicitly so views, commands and tests choose the backends.
"""
