"""Chatfuel-Router stellt den Webhook der Chatfuel-Dialogflow-Bridge bereit."""
import asyncio
import hmac
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from app.core import errors
from app.core.config import Settings, get_settings
from app.core.gateway import SessionGateway, get_gateway
from app.core.models import InboundMessage
from app.core.normalizer import build_payload, fallback_payload

router = APIRouter(prefix="/api", tags=["Chatfuel"])
logger = logging.getLogger(__name__)


def check_secret(provided: Optional[str], expected: str) -> None:
    """Prüft den X-Secret Header, sofern ein Secret konfiguriert ist."""
    if not expected:
        return
    if provided is None or not hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8")):
        raise errors.AuthError("X-Secret header mismatch")


async def read_body(request: Request) -> Any:
    # Ungültiges oder leeres JSON wird wie ein leerer Body behandelt.
    try:
        return await request.json()
    except ValueError:
        return {}


# Alle Methoden landen hier, damit Nicht-POST mit Allow-Header beantwortet wird.
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"]


@router.api_route("/chatfuel", methods=ALL_METHODS)
async def chatfuel_webhook(
    request: Request,
    gateway: SessionGateway = Depends(get_gateway),
    settings: Settings = Depends(get_settings),
):
    """Haupt-Endpunkt für Chatfuel JSON-API Blöcke.

    Pipeline:
    1) Methode und optionales Shared Secret prüfen.
    2) Body zu einer InboundMessage validieren.
    3) Dialogflow detect_intent für die Session des Users (im Threadpool).
    4) Ergebnis in Chatfuel-Nachrichten und Attribute übersetzen.

    Fehler aus Gateway oder Normalizer erreichen Chatfuel nie direkt, sondern
    werden hier in die Fallback-Nachricht umgewandelt.
    """
    try:
        if request.method != "POST":
            return JSONResponse(
                {"error": "Use POST"},
                status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
                headers={"Allow": "POST"},
            )

        check_secret(request.headers.get("x-secret"), settings.bot_secret)

        body = await read_body(request)
        message = InboundMessage.from_payload(body, settings.default_language_code)

        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(
            None, gateway.query, message.user_id, message.text, message.language_code
        )
        payload = build_payload(result, intent_attribute=settings.intent_attribute)
        return JSONResponse(payload.model_dump())

    except errors.AuthError:
        return JSONResponse({"error": "Unauthorized"}, status_code=status.HTTP_401_UNAUTHORIZED)
    except errors.ValidationError as exc:
        return JSONResponse(
            {"messages": [{"text": str(exc)}]},
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    except (errors.ConfigurationError, errors.BackendError) as exc:
        logger.error(f"Chatfuel turn failed ({type(exc).__name__}): {exc}")
    except Exception:
        logger.exception("Unexpected error while handling Chatfuel request")

    return JSONResponse(fallback_payload(settings.fallback_text).model_dump())
