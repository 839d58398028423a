import argparse
import uvicorn
from fastapi import FastAPI
from contextlib import asynccontextmanager
from loguru import logger

import sys
from pathlib import Path

# Add project root to path for package imports
base_dir = Path(__file__).parent
sys.path.insert(0, str(base_dir))

from db.database import init_db
from config import load_config, CONFIG_DIR
from routes import decks, cards, learning  # Import routers

def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{line} - {message}",
    )

# First-run init
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: init config, logging and DB
    config = load_config()
    configure_logging(config["logging"]["level"])
    init_db()
    yield

app = FastAPI(title="Linguatron", description="Spaced repetition flash cards", lifespan=lifespan)

# Include routers
app.include_router(decks.router, prefix="/decks", tags=["decks"])
app.include_router(cards.router, prefix="/cards", tags=["cards"])
app.include_router(learning.router, prefix="/learning", tags=["learning"])

@app.get("/")
async def home():
    return {"message": "Welcome to Linguatron!"}

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Linguatron App")
    parser.add_argument("--init", action="store_true", help="Initialize DB and config")
    parser.add_argument("--dev", action="store_true", help="Run in dev mode with reload")
    parser.add_argument("--port", type=int, default=None, help="Port to listen on")
    args = parser.parse_args()
    config = load_config()  # Ensures config is copied if missing
    configure_logging(config["logging"]["level"])
    if args.init:
        init_db()
        logger.info("DB initialized and config copied to {}", CONFIG_DIR)
        sys.exit(0)
    # Run server
    port = args.port or config["server"]["port"]
    logger.info("Server starting at {}:{}", config["server"]["host"], port)
    uvicorn.run("main:app", host=config["server"]["host"], port=port, reload=args.dev, log_level="info")
