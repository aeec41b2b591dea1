"""FastAPI application entrypoint."""
import logging
import sys
from pathlib import Path

# Project root (parent of ventrelay/)
_ROOT = Path(__file__).resolve().parent.parent

# Load .env FIRST so ICP_*, CORS_*, etc. are set before any app code reads them.
from dotenv import load_dotenv
load_dotenv(_ROOT / ".env", override=True)

# Ensure project root is on path when run as: python ventrelay/main.py
if __name__ == "__main__" or "ventrelay" not in sys.modules:
    if str(_ROOT) not in sys.path:
        sys.path.insert(0, str(_ROOT))

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ventrelay.api.routes import router
from ventrelay.core.config import get_settings
from ventrelay.core.conversation_service import reset_conversation_service

logging.basicConfig(level=getattr(logging, get_settings().log_level, logging.INFO))
_log = logging.getLogger(__name__)

# Keep HTTP client libraries quiet below WARNING (request bodies carry user messages)
for _name in ("httpx", "httpcore", "urllib3", "requests"):
    logging.getLogger(_name).setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Transport is created lazily on the first request (get_conversation_service)
    yield
    reset_conversation_service()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["POST", "OPTIONS", "GET"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.include_router(router)
    return app


app = create_app()

_log.info("Relaying to canister %s at %s", get_settings().canister_id, get_settings().icp_host)

if __name__ == "__main__":
    import os
    import uvicorn
    host = os.getenv("HOST", "127.0.0.1")  # 127.0.0.1 = localhost only
    port = int(os.getenv("PORT", "8000"))
    uvicorn.run("ventrelay.main:app", host=host, port=port, reload=True)
