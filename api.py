"""
PantryChef HTTP API.

Run:
    python -m uvicorn api:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pantrychef.ai_generation import RecipeGenerator, create_openai_client
from pantrychef.config import CORS_ORIGINS, LOG_LEVEL, OPENAI_API_KEY
from pantrychef.database import init_db
from pantrychef.routers import base

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger("pantrychef.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    # One generation client for the whole process, handed to requests via app.state
    if OPENAI_API_KEY:
        app.state.recipe_generator = RecipeGenerator(create_openai_client(OPENAI_API_KEY))
    else:
        app.state.recipe_generator = None
        logger.warning("OPENAI_API_KEY is not set; recipe generation is disabled")
    yield


app = FastAPI(title="PantryChef", version="1.0.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(base.api_router)


@app.get("/health")
def health_check():
    return {"status": "ok"}
