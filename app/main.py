import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.activities.router import router as activities_router
from app.api.v1.bills.router import router as bills_router
from app.api.v1.children.router import router as children_router
from app.api.v1.groups.router import router as groups_router
from app.api.v1.kindergarten_accounts.router import router as kindergarten_accounts_router
from app.api.v1.kindergartens.router import router as kindergartens_router
from app.api.v1.mail.router import router as mail_router
from app.api.v1.mail_history.router import router as mail_history_router
from app.api.v1.parents.router import router as parents_router
from app.api.v1.users.router import router as users_router
from app.core.config import settings
from app.core.error_handlers import register_exception_handlers

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)


def create_app() -> FastAPI:
    app = FastAPI(title="Kindergarten Bill App")

    # CORS: allow the frontend to call this API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Routers
    app.include_router(activities_router)
    app.include_router(groups_router)
    app.include_router(parents_router)
    app.include_router(users_router)
    app.include_router(kindergarten_accounts_router)
    app.include_router(kindergartens_router)
    app.include_router(children_router)
    app.include_router(bills_router)
    app.include_router(mail_history_router)
    app.include_router(mail_router)

    return app


app = create_app()
