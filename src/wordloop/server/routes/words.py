"""
Dictionary routes: /api/words
"""

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from wordloop.core.dictionary import InvalidImportError
from wordloop.server.deps import get_dictionary


router = APIRouter(prefix="/api/words", tags=["words"])


class WordItem(BaseModel):
    word: str
    romanization: str = ""
    translation: str


class AddWordsRequest(BaseModel):
    words: list[WordItem]


class ImportRequest(BaseModel):
    data: str


@router.get("")
async def list_words(request: Request, due: bool = False, db: int = 0):
    """List all words, or only the ones due for review."""
    store = get_dictionary(request.app, db)
    entries = store.due_entries() if due else store.all_entries()
    return {"words": [e.to_dict() for e in entries]}


@router.post("")
async def add_words(req: AddWordsRequest, request: Request, db: int = 0):
    """Add words in bulk."""
    store = get_dictionary(request.app, db)
    try:
        count = store.upsert_many(
            (w.word, w.romanization, w.translation) for w in req.words
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"added": count, "total": len(store)}


@router.delete("")
async def clear_words(request: Request, db: int = 0):
    """Remove every word."""
    store = get_dictionary(request.app, db)
    store.clear()
    return {"cleared": True}


@router.get("/stats")
async def word_stats(request: Request, db: int = 0):
    """Review counts plus dictionary size."""
    store = get_dictionary(request.app, db)
    return {**store.stats().to_dict(), **store.summary()}


@router.get("/export")
async def export_words(request: Request, db: int = 0):
    """Export the dictionary as a JSON string."""
    store = get_dictionary(request.app, db)
    return {"data": store.export_json()}


@router.post("/import")
async def import_words(req: ImportRequest, request: Request, db: int = 0):
    """Import a previously exported dictionary."""
    store = get_dictionary(request.app, db)
    try:
        count = store.import_json(req.data)
    except InvalidImportError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"imported": count, "total": len(store)}


@router.get("/entry/{word}")
async def get_word(word: str, request: Request, db: int = 0):
    """Look up a single word."""
    store = get_dictionary(request.app, db)
    entry = store.lookup(word)
    if entry is None:
        raise HTTPException(status_code=404, detail="Word not found")
    return entry.to_dict()
