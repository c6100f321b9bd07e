from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from signup_wizard.api.v1.wizard import router as wizard_router
from signup_wizard.core.config import settings
from signup_wizard.wiring.dependencies import close_backend_client


class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("session_id", "step", "action", "zip_code", "status", "reason"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    close_backend_client()


app = FastAPI(title="Quote Signup Wizard", version="1.0.0", lifespan=lifespan)

app.include_router(wizard_router, prefix="/wizard", tags=["wizard"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
