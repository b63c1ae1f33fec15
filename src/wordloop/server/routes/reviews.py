"""
Review session routes: /api/reviews
"""

import uuid

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from wordloop.core.dictionary import UnknownWordError
from wordloop.core.review import ReviewSession, ReviewStateError
from wordloop.core.scheduler import Quality
from wordloop.server.deps import get_dictionary


router = APIRouter(prefix="/api/reviews", tags=["reviews"])


class StartReviewRequest(BaseModel):
    shuffle: bool = False


class GradeRequest(BaseModel):
    quality: int


def _get_session(request: Request, session_id: str) -> ReviewSession:
    session = request.app.state.review_sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Review session not found")
    return session


@router.post("")
async def start_review(request: Request, req: StartReviewRequest | None = None, db: int = 0):
    """Start a review session over the words due now."""
    store = get_dictionary(request.app, db)
    session = ReviewSession(store, shuffle=req.shuffle if req else False)

    session_id = uuid.uuid4().hex[:12]
    request.app.state.review_sessions[session_id] = session

    return {"id": session_id, **session.snapshot()}


@router.get("/{session_id}")
async def get_review(session_id: str, request: Request):
    session = _get_session(request, session_id)
    return {"id": session_id, **session.snapshot()}


@router.post("/{session_id}/reveal")
async def reveal_card(session_id: str, request: Request):
    """Show the answer for the current card."""
    session = _get_session(request, session_id)
    session.reveal()
    return {"id": session_id, **session.snapshot()}


@router.post("/{session_id}/grade")
async def grade_card(session_id: str, req: GradeRequest, request: Request):
    """Grade the current card: 1 again, 3 hard, 4 good, 5 easy."""
    session = _get_session(request, session_id)

    try:
        quality = Quality(req.quality)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid quality: {req.quality}")

    try:
        entry = session.grade(quality)
    except ReviewStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except UnknownWordError as e:
        # Removed from the dictionary mid-session
        session.reload()
        raise HTTPException(status_code=404, detail=f"Word not found: {e.args[0]}")

    return {"id": session_id, "graded": entry.to_dict(), **session.snapshot()}


@router.post("/{session_id}/reload")
async def reload_review(session_id: str, request: Request):
    """Fetch due words again."""
    session = _get_session(request, session_id)
    session.reload()
    return {"id": session_id, **session.snapshot()}


@router.delete("/{session_id}")
async def end_review(session_id: str, request: Request):
    """Drop the session. Graded cards are already saved."""
    _get_session(request, session_id)
    del request.app.state.review_sessions[session_id]
    return {"deleted": session_id}
