"""
FastAPI main application
Turf Wars - territory claiming game session server

Modular architecture with separated API routers in turfwars/api/:
- health.py: Health check
- config.py: Effective configuration
- session.py: Location, drawing, claiming, colour, snapshot, map rendering
- leaderboard.py: Ranked scoreboard
- places.py: Starting-location search
- overlay.py: AI contested-route overlay
- admin.py: Session reset

All routers access shared state via the turfwars.state module.
"""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from turfwars import state
from turfwars.config import load_config_or_default

# Import all API routers
from turfwars.api import health, session, leaderboard, places, overlay, admin
from turfwars.api import config as config_router


# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    # Startup: build the session from configuration
    try:
        state.init_state(load_config_or_default())
    except Exception as e:
        logger.error(f"❌ Failed to initialise game session: {e}")
        raise

    yield

    # Shutdown
    logger.info("🛑 Server shutting down")


# Create FastAPI app
app = FastAPI(
    title="Turf Wars - Session Server",
    description="In-memory territory claiming game session with leaderboard and AI route overlay",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware (allow all origins for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ==================== INCLUDE ROUTERS ====================

# Health check (GET /)
app.include_router(health.router)

# Config endpoint (GET /config)
app.include_router(config_router.router)

# Session endpoints (GET /session, POST /session/claim, etc.)
app.include_router(session.router)

# Leaderboard endpoint (GET /api/leaderboard)
app.include_router(leaderboard.router)

# Place search (GET /places, POST /places/select)
app.include_router(places.router)

# AI overlay (POST /overlay/predict, GET /overlay, DELETE /overlay)
app.include_router(overlay.router)

# Admin endpoints (POST /admin/reset)
app.include_router(admin.router)


# ==================== RUN SERVER ====================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
