import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .config import ALLOWED_ORIGINS, SEED_DEMO_DATA, STORE_BACKEND
from .domain.people.router import router as people_router
from .domain.products.router import router as products_router
from .domain.scheduling.router import router as scheduling_router
from .domain.scheduling.session import SchedulingSession
from .domain.store import build_store
from .domain.store.seed import seed_store
from .domain.teams.router import router as teams_router
from .events import EventBus
from .exceptions import CrewboardError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    store = build_store(STORE_BACKEND)
    bus = EventBus()

    if SEED_DEMO_DATA:
        try:
            if await seed_store(store):
                logger.info("Demo data seeded")
        except CrewboardError as e:
            logger.error(f"Failed to seed demo data: {e.message}")

    session = SchedulingSession(store, bus)
    await session.refresh()

    app.state.store = store
    app.state.bus = bus
    app.state.session = session
    yield
    session.close()
    logger.info("Application shutting down...")


app = FastAPI(title="Crewboard API", version="1.0.0", lifespan=lifespan)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(exc.errors())})


@app.exception_handler(ValidationError)
async def model_validation_exception_handler(request: Request, exc: ValidationError):
    """A merged update that fails model validation is the client's error, not ours"""
    logger.warning(f"Model validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(exc.errors(include_url=False))})


@app.exception_handler(CrewboardError)
async def crewboard_exception_handler(request: Request, exc: CrewboardError):
    """Domain errors become {"detail": message} with the error's status code"""
    if exc.status_code >= 500:
        logger.error(f"❌ {request.method} {request.url.path} - {exc.message}")
    else:
        logger.info(f"⚠️ {request.method} {request.url.path} - {exc.status_code} {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    try:
        response = await call_next(request)
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise
    duration_ms = (time.time() - start) * 1000
    logger.debug(f"{request.method} {request.url.path} - {response.status_code} ({duration_ms:.0f}ms)")
    return response


# CORS Configuration
logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Routes
app.include_router(scheduling_router)
app.include_router(teams_router)
app.include_router(people_router)
app.include_router(products_router)


@app.get("/")
def root():
    return {"message": "Crewboard API is running"}


@app.get("/health")
def health():
    return {"status": "healthy"}
