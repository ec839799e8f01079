import logging
from typing import Dict

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, get_settings
from .logging_config import configure_logging
from .routes import router


configure_logging()
logger = logging.getLogger(__name__)
app = FastAPI(title="BDD Coach Backend", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(router)

settings_snapshot = get_settings()
logger.info("Backend starting with default passing score: %s", settings_snapshot.default_passing_score)


@app.get("/healthz")
def health(settings: Settings = Depends(get_settings)) -> Dict[str, str]:
    return {"status": "ok", "passing_score": f"{settings.default_passing_score:g}"}
