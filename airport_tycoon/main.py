"""FastAPI main application exposing the game engine to UI collaborators."""

import logging
import sys
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Config
from .logger import configure_logging, generate_final_report, read_journal
from .routes import command_router, game_router, status_router

# Configure logging
config = Config()
configure_logging(config.LOG_LEVEL, config.LOG_FILE)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(title="Airport Tycoon Engine API", version="1.0.0")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(game_router)
app.include_router(command_router)
app.include_router(status_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Airport Tycoon Engine API", "status": "running"}


def run() -> None:
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)


def report() -> None:
    """Summarise a recorded event journal: airport-tycoon-report <journal.jsonl> [output]."""
    if len(sys.argv) < 2:
        print("usage: airport-tycoon-report <journal.jsonl> [output]")
        sys.exit(1)

    output = sys.argv[2] if len(sys.argv) > 2 else config.REPORT_FILE or "airport_tycoon_report"
    summary = generate_final_report(read_journal(sys.argv[1]), output)
    logger.info(f"Report for {summary['total_events']} events written to {output}.json/.txt")


if __name__ == "__main__":
    run()
