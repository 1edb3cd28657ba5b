"""FastAPI-Einstiegspunkt für die Chatfuel-Dialogflow-Bridge."""
import logging

from fastapi import FastAPI

from app.core.config import settings
from app.core.logging_setup import setup_logging
from app.routers import chatfuel as chatfuel_router

logger = logging.getLogger(__name__)

# Initialisierung der App
app = FastAPI(
    title="Chatfuel Dialogflow Bridge",
    version="1.0.0",
    description="Webhook adapter between Chatfuel JSON API blocks and Dialogflow ES sessions.",
)

# Setup Logging (File + Console)
setup_logging()


@app.on_event("startup")
def startup_event() -> None:
    """Prüft beim Start die Konfiguration.

    Der Dialogflow-Client selbst wird erst beim ersten Request erzeugt;
    fehlende Pflichtwerte lassen jeden Request mit der Fallback-Nachricht enden.
    """
    missing = settings.missing_required()
    if missing:
        logger.warning(f"Missing configuration: {', '.join(missing)}. Every request will get the fallback reply.")
    else:
        logger.info(f"Dialogflow project: {settings.df_project_id}")

    if settings.bot_secret:
        logger.info("X-Secret check is ENABLED.")
    else:
        logger.info("X-Secret check is DISABLED (set BOT_SECRET to enable).")

    print("🚀 Chatfuel Dialogflow Bridge ist initialisiert.")


@app.get("/health")
async def health():
    return {"status": "ok"}


# Router registrieren
app.include_router(chatfuel_router.router)
