"""Übersetzt das Dialogflow-Ergebnis in die flache Nachrichtenliste, die
Chatfuel erwartet.

Reihenfolge der Regeln (die erste greifende gewinnt):

1. Strukturierte Fragmente vorhanden: eine Nachricht pro Fragment, Zeilen
   eines Text-Fragments werden mit Zeilenumbruch verbunden.
2. Sonst der flache ``fulfillment_text``.
3. Sonst ein fester Platzhalter, damit Chatfuel nie eine leere Liste bekommt.
"""
import logging
from typing import Callable, Dict, List, Optional, Tuple

from app.core.models import BackendResult, DisplayMessage, Fragment, OutboundPayload

logger = logging.getLogger(__name__)

PLACEHOLDER_TEXT = "…"


def _render_text(fragment: Fragment) -> Optional[DisplayMessage]:
    if not fragment.lines:
        return None
    return DisplayMessage(text="\n".join(fragment.lines))


# Erweiterungspunkt: weitere Fragment-Typen (card, quick_replies, image, ...)
# hier registrieren. Nicht registrierte Typen werden verworfen.
FRAGMENT_RENDERERS: Dict[str, Callable[[Fragment], Optional[DisplayMessage]]] = {
    "text": _render_text,
}


def normalize(result: BackendResult) -> Tuple[List[DisplayMessage], Optional[str]]:
    """Liefert die Anzeigenachrichten (nie leer) und den erkannten Intent-Namen."""
    messages: List[DisplayMessage] = []

    if result.fragments:
        for fragment in result.fragments:
            renderer = FRAGMENT_RENDERERS.get(fragment.kind)
            if renderer is None:
                logger.debug(f"Dropping unsupported fragment kind: {fragment.kind}")
                continue
            message = renderer(fragment)
            if message is not None:
                messages.append(message)
    elif result.fallback_text:
        messages.append(DisplayMessage(text=result.fallback_text))

    if not messages:
        messages.append(DisplayMessage(text=PLACEHOLDER_TEXT))

    return messages, result.intent_name or None


def build_payload(result: BackendResult, intent_attribute: str = "df_intent") -> OutboundPayload:
    messages, intent_name = normalize(result)
    attributes = {intent_attribute: intent_name} if intent_name else {}
    return OutboundPayload(messages=messages, set_attributes=attributes)


def fallback_payload(text: str) -> OutboundPayload:
    """Nutzerfreundliche Antwort für alle internen Fehler."""
    return OutboundPayload(messages=[DisplayMessage(text=text)])
