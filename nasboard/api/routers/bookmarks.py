"""CRUD закладок."""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from nasboard.api.dependencies import get_bookmark_manager
from nasboard.bookmarks.exceptions import BookmarkValidationError
from nasboard.bookmarks.manager import BookmarkManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/bookmarks", tags=["bookmarks"])


class BookmarkPayload(BaseModel):
    """Тело POST/PUT; обязательность полей проверяет BookmarkManager."""

    title: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    icon: Optional[str] = None
    order: Optional[int] = None


@router.get("")
def list_bookmarks(manager: BookmarkManager = Depends(get_bookmark_manager)) -> List[Dict[str, Any]]:
    return [bookmark.to_dict() for bookmark in manager.list_bookmarks()]


@router.post("")
def create_bookmark(
    payload: BookmarkPayload,
    manager: BookmarkManager = Depends(get_bookmark_manager),
):
    try:
        bookmark = manager.create_bookmark(payload.model_dump(exclude_none=True))
    except BookmarkValidationError as e:
        logger.warning("Rejected bookmark: %s", e)
        return JSONResponse(status_code=400, content={"error": e.reason})
    return bookmark.to_dict()


@router.put("/{bookmark_id}")
def update_bookmark(
    bookmark_id: str,
    payload: BookmarkPayload,
    manager: BookmarkManager = Depends(get_bookmark_manager),
):
    try:
        bookmark = manager.update_bookmark(bookmark_id, payload.model_dump(exclude_unset=True))
    except BookmarkValidationError as e:
        logger.warning("Rejected update of bookmark %s: %s", bookmark_id, e)
        return JSONResponse(status_code=400, content={"error": e.reason})
    except KeyError:
        return JSONResponse(status_code=404, content={"error": "Bookmark not found"})
    return bookmark.to_dict()


@router.delete("/{bookmark_id}")
def delete_bookmark(
    bookmark_id: str,
    manager: BookmarkManager = Depends(get_bookmark_manager),
):
    try:
        manager.delete_bookmark(bookmark_id)
    except KeyError:
        return JSONResponse(status_code=404, content={"error": "Bookmark not found"})
    return {"success": True}
