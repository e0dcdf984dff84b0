"""Upload limits and share link settings."""

from typing import Final

from server.settings.components import config

# Uploads
FILE_UPLOAD_MAX_BYTES = config(
    'FILE_UPLOAD_MAX_BYTES',
    cast=int,
    default=10 * 1024 * 1024,  # 10 MB
)

FILE_UPLOAD_ALLOWED_EXTENSIONS: Final = frozenset((
    'jpeg',
    'jpg',
    'png',
    'gif',
    'pdf',
    'doc',
    'docx',
    'txt',
    'zip',
    'rar',
    'mp4',
    'mp3',
    'mov',
))

# Django keeps uploads up to this size in memory before spooling to disk
FILE_UPLOAD_MAX_MEMORY_SIZE = FILE_UPLOAD_MAX_BYTES

# Share links
SHARE_LINK_MIN_DAYS: Final = 1
SHARE_LINK_MAX_DAYS: Final = 365

# Expired links are kept this long before `purge_expired_links` drops them
SHARE_LINK_RETENTION_DAYS = config(
    'SHARE_LINK_RETENTION_DAYS',
    cast=int,
    default=30,
)
