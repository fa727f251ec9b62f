from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from app.core.logging import configure_logging
from app.api.evaluation import router as evaluation_router
from app.api.vendors import router as vendors_router
from app.dependencies import get_telemetry_source, get_vendor_registry

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    # Load configuration eagerly
    get_vendor_registry()
    get_telemetry_source()
    yield

app = FastAPI(
    title=settings.service_name,
    lifespan=lifespan
)

# CORS middleware - allow dashboard to call API
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(vendors_router, prefix="/v1")
app.include_router(evaluation_router, prefix="/v1")

@app.get("/health")
async def health():
    return {"status": "ok", "service": settings.service_name}
