"""
Segmentation routes: /api/segment, /api/annotate
"""

from fastapi import APIRouter, Request
from pydantic import BaseModel

from wordloop.core.segmenter import Segmenter
from wordloop.server.deps import get_dictionary, get_segmenter


router = APIRouter(prefix="/api", tags=["segment"])


class SegmentRequest(BaseModel):
    text: str
    prompt: str | None = None


class AnnotateRequest(BaseModel):
    text: str


@router.post("/segment")
async def segment_text(req: SegmentRequest, request: Request, db: int = 0):
    """Segment text, asking the LLM about sentences with unknown words."""
    segmenter = get_segmenter(request.app, db)
    segments = segmenter.segment(req.text, req.prompt)
    return {
        "segments": [s.to_dict() for s in segments],
        "failed": sum(1 for s in segments if s.failed),
    }


@router.post("/annotate")
async def annotate_text(req: AnnotateRequest, request: Request, db: int = 0):
    """Annotate text from known words only."""
    segmenter = Segmenter(get_dictionary(request.app, db), ai=None)
    segments = segmenter.annotate(req.text)
    return {"segments": [s.to_dict() for s in segments]}
