from datetime import timedelta
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fittrack.api import api_router
from fittrack.config import Settings, settings as default_settings
from fittrack import database
from fittrack.errors import register_exception_handlers
from fittrack.logging_config import configure_logging
from fittrack.middleware.access_gate import AccessGate
from fittrack.services.token_service import TokenService


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="FitTrack",
        description="Personal fitness tracking: workouts, goals and statistics",
        version="1.0.0",
    )

    # The signing secret is fixed here for the life of the process
    token_service = TokenService(
        secret=settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        expires_in=timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS),
    )
    if settings is default_settings:
        app.state.engine = database.engine
    else:
        app.state.engine = database.build_engine(settings.DATABASE_URL, echo=settings.DEBUG)
    app.state.settings = settings
    app.state.token_service = token_service

    app.middleware("http")(
        AccessGate(
            token_service,
            protected_routes=settings.PROTECTED_ROUTES,
            auth_routes=settings.AUTH_ROUTES,
            exempt_prefixes=settings.GATE_EXEMPT_PREFIXES,
            login_path=settings.LOGIN_PATH,
            home_path=settings.HOME_PATH,
            cookie_name=settings.TOKEN_COOKIE_NAME,
        )
    )

    # CORS middleware configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.on_event("startup")
    async def on_startup():
        database.create_db_and_tables(app.state.engine)

    @app.get("/")
    async def root():
        return {"message": "Welcome to FitTrack API"}

    return app


app = create_app()
