"""
LoreMaker FastAPI Application Entry Point
FastAPI 应用入口
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from loremaker import __version__
from loremaker.config import settings
from loremaker.dependencies import get_lore_index
from loremaker.exceptions import LibraryError
from loremaker.routers import characters_router, duels_router, taxonomies_router
from loremaker.utils.logger import get_logger

logger = get_logger(__name__)

# Initialize rate limiter
limiter = Limiter(key_func=get_remote_address, default_limits=["200/minute"])

# Create FastAPI application / 创建 FastAPI 应用
app = FastAPI(
    title="LoreMaker API",
    description="LoreMaker Universe taxonomy & duel engine / 角色图鉴与对决引擎",
    version=__version__,
    debug=settings.debug,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


# Global exception handler; internal details never reach clients
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch all unhandled exceptions and return a safe 500 response."""
    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "https://loremaker.app",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers / 注册路由
# Mounted at "/" for the dev proxy and at "/api" for the site.
routers = [
    characters_router,
    taxonomies_router,
    duels_router,
]

for router in routers:
    app.include_router(router)
    app.include_router(router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint / 健康检查"""
    library = get_lore_index().library
    cached = library.cached()
    return {
        "status": "ok",
        "version": app.version,
        "characters_cached": len(cached) if cached is not None else 0,
    }


@app.on_event("startup")
async def on_startup():
    """Warm the library and start spotlight rotation / 预热角色库并启动聚光灯轮播"""
    index = get_lore_index()
    try:
        await index.refresh()
    except LibraryError as exc:
        logger.warning("Character library not loaded at startup: %s", exc)
    index.start_spotlights()


@app.on_event("shutdown")
async def on_shutdown():
    """Cancel spotlight timers / 取消轮播计时器"""
    get_lore_index().stop_spotlights()


if __name__ == "__main__":
    import uvicorn

    logger.info("Running in Dev Mode")
    uvicorn.run(
        "loremaker.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
