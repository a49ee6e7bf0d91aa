# --- readyride/main.py -------------------------------------------------------
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .settings import settings
from .database import Base, engine
from . import models  # ensure models are loaded before create_all

logging.basicConfig(
    level=settings.RR_LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(title="ReadyRide Delivery API")

# CORS so the web app (http://localhost:3000) can call the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.RR_FRONTEND_ORIGIN, "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Create DB tables on boot (dev convenience)
Base.metadata.create_all(bind=engine)

@app.get("/health")
def health():
    return {"ok": True, "env": settings.APP_ENV}

# Routers
from . import quotes

app.include_router(quotes.router)
# ---------------------------------------------------------------------------
