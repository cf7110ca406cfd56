"""FastAPI application factory."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from swapdesk import __version__
from swapdesk.config import get_settings
from swapdesk.trading.factory import TradingSession, create_session


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    yield
    # Shutdown
    await app.state.session.close()


def create_app(session: Optional[TradingSession] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    debug = settings.debug and not settings.is_production

    app = FastAPI(
        title="Swapdesk API",
        description="Token swap proposal and execution API",
        version=__version__,
        lifespan=lifespan,
        debug=debug,
    )
    app.state.session = session or create_session(settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if debug else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routes
    from swapdesk.api.routes import commands, health, tokens, trades

    app.include_router(health.router, tags=["Health"])
    app.include_router(trades.router, prefix="/api/v1", tags=["Trades"])
    app.include_router(commands.router, prefix="/api/v1", tags=["Commands"])
    app.include_router(tokens.router, prefix="/api/v1", tags=["Tokens"])

    return app
