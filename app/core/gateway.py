"""Steuert die Kommunikation mit Dialogflow ES (v2): hält den einzigen
SessionsClient des Prozesses und bildet jede Chatfuel-User-ID auf eine
eigene Dialogflow-Session ab."""
import json
import logging
import threading
from typing import Callable, Optional, Tuple

from google.api_core import exceptions as google_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud import dialogflow
from google.oauth2 import service_account

from app.core.config import Settings, settings as default_settings
from app.core.errors import BackendError, ConfigurationError
from app.core.models import BackendResult, Fragment

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"


def build_sessions_client(credentials_json: str) -> dialogflow.SessionsClient:
    """Erzeugt einen SessionsClient aus dem Service-Account JSON (als String).

    Benötigt werden nur ``client_email`` und ``private_key``; fehlt
    ``token_uri`` im Key, wird der Google-Standard verwendet.
    """
    try:
        info = json.loads(credentials_json)
    except ValueError as exc:
        raise ConfigurationError("GOOGLE_APPLICATION_CREDENTIALS_JSON is not valid JSON") from exc
    if not isinstance(info, dict):
        raise ConfigurationError("GOOGLE_APPLICATION_CREDENTIALS_JSON must be a JSON object")

    info.setdefault("token_uri", DEFAULT_TOKEN_URI)
    try:
        credentials = service_account.Credentials.from_service_account_info(info)
    except (ValueError, KeyError) as exc:
        raise ConfigurationError(f"Invalid service account credentials: {exc}") from exc

    return dialogflow.SessionsClient(credentials=credentials)


def to_backend_result(response: dialogflow.DetectIntentResponse) -> BackendResult:
    """Reduziert die DetectIntentResponse auf das, was der Normalizer braucht."""
    query_result = response.query_result
    fragments = []
    for message in query_result.fulfillment_messages:
        # Der "message"-Oneof sagt, welcher Typ gesetzt ist (text, card, payload, ...).
        kind = dialogflow.Intent.Message.pb(message).WhichOneof("message") or "unknown"
        lines = list(message.text.text) if kind == "text" else []
        fragments.append(Fragment(kind=kind, lines=lines))

    return BackendResult(
        fragments=fragments,
        fallback_text=query_result.fulfillment_text,
        intent_name=query_result.intent.display_name,
    )


class SessionGateway:
    """Sendet Chatfuel-Texte als detect_intent an Dialogflow.

    Der Client wird beim ersten Aufruf erzeugt und danach für die gesamte
    Prozesslaufzeit wiederverwendet. Die Initialisierung ist per Lock
    abgesichert, damit parallele erste Requests nur einen Client bauen.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client_factory: Optional[Callable[[str], dialogflow.SessionsClient]] = None,
    ) -> None:
        self.settings = settings or default_settings
        self._client_factory = client_factory or build_sessions_client
        self._client: Optional[dialogflow.SessionsClient] = None
        self._lock = threading.Lock()

    def _require_config(self) -> Tuple[str, str]:
        missing = self.settings.missing_required()
        if missing:
            raise ConfigurationError(f"Missing {' or '.join(missing)} env vars")
        return self.settings.df_project_id, self.settings.google_credentials_json

    def get_client(self) -> dialogflow.SessionsClient:
        if self._client is None:
            with self._lock:
                if self._client is None:
                    _, credentials_json = self._require_config()
                    self._client = self._client_factory(credentials_json)
                    logger.info(f"Dialogflow SessionsClient created for project {self.settings.df_project_id}")
        return self._client

    def session_key(self, user_id: str) -> str:
        """Dialogflow-Session-Pfad für eine User-ID (gleiche ID = gleiche Session)."""
        project_id, _ = self._require_config()
        return dialogflow.SessionsClient.session_path(project_id, str(user_id))

    def query(self, user_id: str, text: str, language_code: Optional[str] = None) -> BackendResult:
        """Schickt genau eine Textanfrage an Dialogflow, ohne Retry."""
        client = self.get_client()
        session = self.session_key(user_id)
        query_input = dialogflow.QueryInput(
            text=dialogflow.TextInput(
                text=str(text),
                language_code=language_code or self.settings.default_language_code,
            )
        )

        logger.info(f"Dialogflow Request [Session {session}]: {text}")
        try:
            response = client.detect_intent(request={"session": session, "query_input": query_input})
        except (google_exceptions.GoogleAPIError, auth_exceptions.GoogleAuthError) as exc:
            raise BackendError(f"detect_intent failed for session {session}: {exc}") from exc

        result = to_backend_result(response)
        logger.info(f"Dialogflow Response [Session {session}]: intent={result.intent_name!r}")
        return result


# Globaler Gateway (einziger Zugriffspunkt auf den SessionsClient)
gateway = SessionGateway()


def get_gateway() -> SessionGateway:
    return gateway
