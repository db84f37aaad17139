"""Infrastructure layer for files app.

This package contains integrations with external systems:
- S3-compatible storage backend keyed by content id
- Content store client with the read retry policy
- Content id and MIME type helpers
- Scratch staging of uploads

Keep infrastructure concerns separate from business logic.
"""
