"""FastAPI application for prompt authoring, scoring and refinement."""

import logging
import os

from dotenv import load_dotenv
load_dotenv()  # refine defaults are read from the environment at import time

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from promptmaker.evaluation import RUBRIC_VERSION
from studio_api.prompt_routes import router as prompt_router
from studio_api.refine_routes import router as refine_router
from studio_api.template_routes import router as template_router

# CORS origins - configurable via environment variable
# Use comma-separated values for multiple origins, or "*" for all (development only)
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("openai").setLevel(logging.WARNING)
logging.getLogger("anthropic").setLevel(logging.WARNING)

app = FastAPI(
    title="Prompt Maker API",
    description="API server for structured prompt authoring, quality scoring and refinement",
    version="0.1.0",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# include routes
app.include_router(prompt_router, prefix="/api")
app.include_router(template_router, prefix="/api")
app.include_router(refine_router, prefix="/api")


@app.get("/")
def root():
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": "0.1.0",
        "rubric_version": RUBRIC_VERSION,
        "endpoints": {
            "state": "/api/state/default",
            "apply": "/api/state/apply",
            "compile": "/api/prompts/compile",
            "evaluate": "/api/prompts/evaluate",
            "templates": "/api/templates",
            "sections": "/api/sections",
            "suggestions": "/api/suggestions",
            "refine": "/api/refine",
        },
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
