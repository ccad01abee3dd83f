# willowbank/api/deps.py
"""FastAPI dependencies shared by the routers."""

from typing import Annotated, Any

from fastapi import Body, Depends, Path, Request

from willowbank.models.records import MAX_INTEGER
from willowbank.models.store import RecordStore


def get_store(request: Request) -> RecordStore:
    """Return the record store owned by the app's lifecycle."""
    return request.app.state.lifecycle.store


StoreDep = Annotated[RecordStore, Depends(get_store)]

# Raw JSON body; services validate it against their request models
JsonBody = Annotated[Any, Body()]

# Path ids outside the SQLite INTEGER range are rejected as 400
RecordId = Annotated[int, Path(ge=0, le=MAX_INTEGER)]
