"""
Notedesk.

Local note-taking backend.

- core/: Configuration, logging, database handle, exceptions
- models/: SQLAlchemy table definitions
- repositories/: Data access (the note store)
- services/: Note engine and legacy-shape compatibility layer
- schemas/: Pydantic request/response shapes
- api/: FastAPI routers for the presentation client
"""

__version__ = "0.1.0"
