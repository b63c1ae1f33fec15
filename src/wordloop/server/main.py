"""
wordloop API server.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from wordloop.server.routes import words, segment, reviews


def print_routes(app: FastAPI):
    """Startup listing of the API, one block per router tag."""
    by_tag: dict[str, list[str]] = {}
    for route in app.routes:
        if not isinstance(route, APIRoute):
            continue
        tag = route.tags[0] if route.tags else "misc"
        for method in sorted(route.methods - {"HEAD", "OPTIONS"}):
            by_tag.setdefault(tag, []).append(f"{method:7} {route.path}")

    print(f"\nwordloop API ({sum(len(v) for v in by_tag.values())} endpoints)")
    for tag in sorted(by_tag):
        print(f"  [{tag}]")
        for line in sorted(by_tag[tag], key=lambda s: s.split()[1]):
            print(f"    {line}")
    print()


@asynccontextmanager
async def lifespan(app: FastAPI):
    print_routes(app)
    yield


app = FastAPI(title="wordloop API", lifespan=lifespan)

# Process-wide state, filled lazily by wordloop.server.deps
app.state.dictionaries = {}
app.state.ai_segmenter = None
app.state.review_sessions = {}

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(words.router)
app.include_router(segment.router)
app.include_router(reviews.router)


@app.get("/")
async def root():
    return {"name": "wordloop API", "version": "0.1.0"}
