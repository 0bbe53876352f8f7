"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gamecalc.config import settings
from gamecalc.api.routes.pokemon import go_router as pokemon_go_router
from gamecalc.api.routes.pokemon import router as pokemon_router
from gamecalc.api.routes.wow import router as wow_router
from gamecalc.repositories.json_cache import JsonCache


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # One dataset cache shared by every repository the routes create
    if not hasattr(app.state, "json_cache"):
        app.state.json_cache = JsonCache(production=settings.is_production)
    yield
    app.state.json_cache.clear()


app = FastAPI(
    title="Game Calc",
    description="Pokémon catch chance and WoW gear/stat calculators",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "gamecalc"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Game Calc API",
        "version": "0.1.0",
        "docs": "/docs",
    }


# Register routers
app.include_router(pokemon_router)
app.include_router(pokemon_go_router)
app.include_router(wow_router)
