import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from impacts.config import get_settings
from impacts.database import engine, Base, async_session
from impacts.exceptions import install_exception_handlers
from impacts.routers import activities, admin, milestones, readiness, users
from impacts.seed import seed_reference_data
import impacts.models  # noqa: F401  registers tables on Base.metadata

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: create tables then seed reference data
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    if settings.seed_reference_data:
        async with async_session() as session:
            await seed_reference_data(session)
    logger.info("IMPACTS backend started")
    yield
    # Shutdown
    await engine.dispose()


app = FastAPI(
    title="IMPACTS Coordinator Backend",
    description="Activity logging, milestone tracking and readiness assessments for pediatric readiness coordinators",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class NoCacheMiddleware(BaseHTTPMiddleware):
    """Middleware to add no-cache headers so per-user data is never cached."""
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, proxy-revalidate, max-age=0"
        response.headers["Expires"] = "0"
        response.headers["Pragma"] = "no-cache"
        return response


app.add_middleware(NoCacheMiddleware)

install_exception_handlers(app)

app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(activities.router, prefix="/api/activities", tags=["Activities"])
app.include_router(admin.router, prefix="/api/admin", tags=["Admin"])
app.include_router(milestones.router, prefix="/api/milestones", tags=["Milestones"])
app.include_router(readiness.router, prefix="/api/readiness-assessment", tags=["Readiness Assessment"])


@app.get("/api/health")
async def health_check():
    return {"status": "healthy", "service": "impacts-backend"}
