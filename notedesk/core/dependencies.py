"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

import uuid
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from notedesk.core.database import Database


def get_database(request: Request) -> Database:
    """Return the process-wide Database opened in the app lifespan."""
    return request.app.state.database


async def get_db_session(
    database: Annotated[Database, Depends(get_database)],
) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.

    One session per request; committed when the endpoint returns,
    rolled back when it raises.
    """
    async with database.session() as session:
        yield session


DbSession = Annotated[AsyncSession, Depends(get_db_session)]


async def get_request_id(
    request: Request,
    x_request_id: str | None = Header(None),
) -> str:
    """Request ID assigned by RequestContextMiddleware, else the header, else a new one."""
    return (
        getattr(request.state, "request_id", None)
        or x_request_id
        or str(uuid.uuid4())
    )


RequestId = Annotated[str, Depends(get_request_id)]
