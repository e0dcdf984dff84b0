"""Business logic layer for files app.

This package contains all business logic:
- Access checks shared by every operation
- Folder tree operations (create, rename, list, breadcrumbs, delete)
- File registry operations (upload, place, get, delete)
- Share link operations (issue, resolve, revoke, list)

All business logic should be implemented here, separate from
models (data layer), infrastructure (external systems) and views.
"""
