import logging
import os
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mwangaza.core.config import settings
from mwangaza.db import query as mock_db
from mwangaza.db import routes as database_routes
from mwangaza.auth import routes as auth_routes
from mwangaza.auth.service import ensure_default_admin
from mwangaza.clients import routes as client_routes
from mwangaza.visits import routes as visit_routes
from mwangaza.academics import routes as academic_routes
from mwangaza.dashboard import routes as dashboard_routes

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Client registration, home visits, academic progress and aftercare tracking",
    version="1.0.0",
)

# CORS to allow external frontend(s)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.frontend_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include auth routes under /auth
app.include_router(auth_routes.router, prefix="/auth", tags=["Auth"])
app.include_router(client_routes.router, tags=["Clients"])
app.include_router(visit_routes.router, tags=["Home Visits"])
app.include_router(academic_routes.router, tags=["Academics"])
app.include_router(dashboard_routes.router, tags=["Dashboard"])
app.include_router(database_routes.router, tags=["Database"])

@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.get("/")
def root():
    return {"message": "API running successfully"}


@app.on_event("startup")
async def on_startup() -> None:
    # Initialize tables on startup, but don't crash service if storage is unavailable
    if not await mock_db.test_connection():
        logger.error("Startup storage init failed")
        return
    try:
        if ensure_default_admin():
            logger.warning("Created default administrator %s, change its password", settings.DEFAULT_ADMIN_EMAIL)
    except Exception:
        logger.exception("Default administrator setup skipped")


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", 8080))
    uvicorn.run(app, host="0.0.0.0", port=port)
