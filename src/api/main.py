import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.routes.document import router as document_router
from src.api.routes.participants import router as participants_router
from src.api.state import RosterService
from src.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Meet Roster API",
    description="Live participant extraction from Google Meet pages",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["https://meet.google.com"],
    allow_origin_regex=r"chrome-extension://.*|http://localhost:\d+",
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.state.roster = RosterService()

app.include_router(participants_router)
app.include_router(document_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}
