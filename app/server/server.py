from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from api.router import api_router
from api.dependencies.rate_limits import setup_rate_limiter
from infrastructure.logging import bind_request_context
from infrastructure.services import get_settings
from server.lifespan import lifespan


def create_app() -> FastAPI:
    """Build the FastAPI application with routers and middleware."""
    settings = get_settings()
    app = FastAPI(title="Webhook Notifier", lifespan=lifespan)
    setup_rate_limiter(app)

    allow_origins = ["*"] if settings.is_production else settings.server.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        with bind_request_context(
            correlation_id=request.headers.get("X-Correlation-ID"),
            actor_id=request.headers.get("X-Actor-Id"),
            request_path=request.url.path,
            request_method=request.method,
        ) as correlation_id:
            response = await call_next(request)
            response.headers["X-Correlation-ID"] = correlation_id
            return response

    app.include_router(api_router)
    return app


handler = create_app()
