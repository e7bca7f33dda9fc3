from __future__ import annotations  # FastAPI server for the CampusPrep backend

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from accounts import AccountStore, AuthService, BcryptHasher, RevokedTokenStore, TokenIssuer
from api import auth_routes, dashboard_routes, interview_routes, note_routes
from api.errors import install_error_handlers
from api.schemas import HealthResp
from config import Settings, load_settings
from dashboard import DashboardService
from interview_session import AttemptStore, InterviewSessionService
from notes import NoteService, NoteStore
from observability import configure_logging, log_event
from question_provider import QuestionProvider, build_provider
from storage.migrate import migrate

logger = logging.getLogger(__name__)

SERVICE_NAME = "campusprep-backend"


@dataclass
class AppContainer:  # Wired stores and services shared by every request
    settings: Settings
    provider: QuestionProvider
    accounts: AccountStore
    auth: AuthService
    interviews: InterviewSessionService
    dashboard: DashboardService
    notes: NoteService


def build_container(settings: Settings, provider: Optional[QuestionProvider] = None) -> AppContainer:
    migrate(settings.DB_PATH)
    accounts = AccountStore(settings.DB_PATH)
    attempts = AttemptStore(settings.DB_PATH)
    revoked = RevokedTokenStore(settings.DB_PATH)
    purged = revoked.purge_expired()
    if purged:
        logger.info("Purged %d expired revoked-token entries", purged)
    provider = provider or build_provider(settings)
    auth = AuthService(
        accounts,
        revoked,
        BcryptHasher(settings.BCRYPT_ROUNDS),
        TokenIssuer(settings),
    )
    return AppContainer(
        settings=settings,
        provider=provider,
        accounts=accounts,
        auth=auth,
        interviews=InterviewSessionService(attempts, provider),
        dashboard=DashboardService(attempts, accounts),
        notes=NoteService(NoteStore(settings.DB_PATH), accounts),
    )


def create_app(settings: Optional[Settings] = None, container: Optional[AppContainer] = None) -> FastAPI:
    configure_logging()
    if container is None:
        container = build_container(settings or load_settings())
    settings = container.settings

    app = FastAPI(title="CampusPrep API")
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_error_handlers(app, expose_stack=not settings.is_production)

    @app.get("/health", response_model=HealthResp)
    def health() -> HealthResp:  # Liveness probe
        return HealthResp(service=SERVICE_NAME)

    for module in (auth_routes, interview_routes, dashboard_routes, note_routes):
        app.include_router(module.router)

    log_event("app.start", SERVICE_NAME, status=settings.ENVIRONMENT, node=type(container.provider).__name__)
    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app_server:create_app", factory=True, host="0.0.0.0", port=8000)
