from fastapi import FastAPI
from dotenv import load_dotenv
import logging

from pathlib import Path

from stackcut.api.routes import router
from stackcut.config import log_level_from_env

# Pick up STACKCUT_* settings from a repo-level .env before anything reads them.
_project_root = Path(__file__).resolve().parent.parent
load_dotenv(dotenv_path=_project_root / ".env", override=False)

app = FastAPI(title="stackcut", version="0.1.0")
app.include_router(router)
# Configure logging
logging.basicConfig(level=log_level_from_env())
logger = logging.getLogger(__name__)


@app.get("/info")
async def info() -> dict[str, str]:
    return {"name": "stackcut", "version": "0.1.0"}
