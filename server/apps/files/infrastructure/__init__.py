"""Infrastructure layer for files app.

This package contains integrations with external systems:
- Custom storage backend (S3/MinIO)
- Upload metadata (MIME type, checksum, object keys, limits)

Keep infrastructure concerns separate from business logic.
"""
