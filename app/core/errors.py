"""Fehlertypen der Bridge. Jeder Fehlerfall hat eine eigene Klasse, damit der
Webhook-Router die Antwort (HTTP-Status bzw. Fallback-Text) an genau einer
Stelle festlegen kann."""


class BridgeError(Exception):
    """Basisklasse aller erwarteten Fehler der Bridge."""


class ConfigurationError(BridgeError):
    """Pflichtkonfiguration fehlt oder ist unbrauchbar (Projekt-ID, Credentials)."""


class ValidationError(BridgeError):
    """Eingehender Request enthält nicht die benötigten Felder."""


class AuthError(BridgeError):
    """X-Secret Header passt nicht zum konfigurierten Secret."""


class BackendError(BridgeError):
    """Dialogflow-Aufruf ist fehlgeschlagen (Netzwerk, Remote-Fehler, Timeout)."""
