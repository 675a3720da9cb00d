from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .database import engine, Base
from .routers import calculators, materials, estimates

logger = logging.getLogger("estimator")
logger.setLevel(settings.LOG_LEVEL.upper())

# Create tables (handles new tables but won't add columns to existing ones)
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title=settings.APP_NAME,
    description="Construction material estimates with per-account price overrides",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(calculators.router, prefix="/api")
app.include_router(materials.router, prefix="/api")
app.include_router(estimates.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "material-estimator"}
