from dotenv import load_dotenv
import os

load_dotenv()
from contextlib import asynccontextmanager

from fastapi import FastAPI

from prose_review.api.routes import router as api_router
from prose_review.core.config import configure_logging, settings


def validate_startup_config():
    """Validiert kritische Umgebungsvariablen beim Startup (fail-fast)."""
    errors = []

    # Prüfe OPENAI_API_KEY (wird für den Report-Stream benötigt)
    if os.getenv("TEST_MODE") != "1" and not os.getenv("OPENAI_API_KEY"):
        errors.append(
            "OPENAI_API_KEY is not set. "
            "Set it in .env file or as environment variable. "
            "Required for LLM-based review."
        )

    if settings.quick_fix_max_length <= 0:
        errors.append("QUICK_FIX_MAX_LENGTH must be positive.")

    if errors:
        error_msg = "Startup validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(error_msg)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Validierung beim Startup
    configure_logging()
    validate_startup_config()
    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "Prose Review API running"}
