"""API-Modelle der Bridge: eingehende Chatfuel-Nachrichten, das vereinfachte
Dialogflow-Ergebnis und die ausgehende Chatfuel-Antwort."""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator

from app.core.config import settings
from app.core.errors import ValidationError

REQUIRED_FIELDS = ("user_id", "text")


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


class InboundMessage(BaseModel):
    """Eingehende Chatfuel-Nachricht, bereits auf Strings normalisiert."""

    user_id: str
    text: str
    language_code: str

    @field_validator("user_id", "text", mode="before")
    @classmethod
    def _coerce_to_str(cls, value: Any) -> str:
        # Chatfuel schickt IDs teils als Zahl; bool ist zwar int, aber kein gültiger Wert.
        if isinstance(value, bool):
            raise ValueError("must be a string or number")
        if isinstance(value, (int, float)):
            return str(value)
        if not isinstance(value, str):
            raise ValueError("must be a string or number")
        return value

    @classmethod
    def from_payload(cls, body: Any, default_language: Optional[str] = None) -> "InboundMessage":
        """Validiert den rohen JSON-Body und baut daraus eine InboundMessage.

        Alles, was kein JSON-Objekt ist, wird wie ein leerer Body behandelt.
        Fehlende oder leere Pflichtfelder führen zu einem ValidationError mit
        feldgenauer Meldung.
        """
        if not isinstance(body, dict):
            body = {}

        missing = [name for name in REQUIRED_FIELDS if _is_blank(body.get(name))]
        if missing:
            raise ValidationError(f"Missing {' or '.join(missing)}")

        language_code = body.get("language_code")
        if _is_blank(language_code) or not isinstance(language_code, str):
            language_code = default_language or settings.default_language_code

        try:
            return cls(user_id=body["user_id"], text=body["text"], language_code=language_code)
        except PydanticValidationError as exc:
            fields = sorted({str(error["loc"][0]) for error in exc.errors() if error["loc"]})
            raise ValidationError(f"Invalid {' or '.join(fields) or 'payload'}") from exc


class Fragment(BaseModel):
    """Ein Baustein der Dialogflow-Antwort (Text, Card, Quick Replies, ...)."""

    kind: str = "text"
    lines: List[str] = Field(default_factory=list)


class BackendResult(BaseModel):
    """Vereinfachtes, read-only Ergebnis eines detect_intent Aufrufs."""

    fragments: List[Fragment] = Field(default_factory=list)
    fallback_text: str = ""
    intent_name: str = ""


class DisplayMessage(BaseModel):
    text: str


class OutboundPayload(BaseModel):
    """Antwort im Chatfuel JSON-API Format."""

    messages: List[DisplayMessage]
    set_attributes: Dict[str, str] = Field(default_factory=dict)
