from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from dotenv import load_dotenv
from contextlib import asynccontextmanager
import logging
import traceback

from app.config import Capabilities, Settings
from app.store import bootstrap
from app.admin import router as admin_router
from app.auth_routes import router as auth_router
from app.jobs import router as jobs_router
from app.saved import router as saved_router
from app.rate_limit import limiter
from slowapi.errors import RateLimitExceeded
from slowapi import _rate_limit_exceeded_handler

load_dotenv()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Seed and repair the JSON store before serving requests."""
    logger.info(f"[certjobs] env: CERTJOBS_ENV={Settings.env()}, db: {Settings.db_file()}")
    if not Capabilities.is_auth_configured():
        logger.warning("[certjobs] TOKEN_SECRET not set; tokens will not survive a restart")

    summary = bootstrap()
    logger.info(
        f"[certjobs] store ready: {summary['total']} jobs "
        f"(seeded={summary['seeded']}, patched={summary['patched']})"
    )

    yield


app = FastAPI(title="CertJobs API", version="0.1.0", lifespan=lifespan)

# Add rate limiter state
app.state.limiter = limiter

# Rate limit exceeded handler
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


# Error masking middleware
@app.middleware("http")
async def error_masking_middleware(request: Request, call_next):
    """Mask detailed errors in production; show full errors in dev."""
    try:
        response = await call_next(request)
        return response
    except HTTPException:
        raise
    except Exception as e:
        is_dev = Settings.is_dev()

        logger.error(f"Unhandled error: {str(e)}")
        if is_dev:
            logger.error(traceback.format_exc())

        if is_dev:
            return JSONResponse(
                status_code=500,
                content={
                    "status": "error",
                    "error": str(e),
                    "traceback": traceback.format_exc()
                }
            )
        else:
            return JSONResponse(
                status_code=500,
                content={
                    "status": "error",
                    "error": "An internal error occurred. Please try again later."
                }
            )


app.add_middleware(
    CORSMiddleware,
    allow_origins=Settings.cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(jobs_router)
app.include_router(saved_router)
app.include_router(admin_router)


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "Certified Jobs API is running"


@app.get("/api/healthz")
async def healthz():
    return Capabilities.get_status()


@app.get("/api/capabilities")
async def capabilities():
    return Capabilities.get_capabilities()
