"""Konfigurationsmodul für die Chatfuel-Dialogflow-Bridge: lädt Projekt-ID,
Service-Account-Schlüssel und optionales Shared Secret via Pydantic-Settings."""
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Hält alle konfigurierbaren Werte, die die Bridge zur Laufzeit
    benötigt (Dialogflow-Projekt, Credentials, Secret, Texte)."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    df_project_id: str = Field("", alias="DF_PROJECT_ID")  # z.B. autosalesbot-qw9j
    # Kompletter JSON-Key des Service Accounts als String.
    google_credentials_json: str = Field("", alias="GOOGLE_APPLICATION_CREDENTIALS_JSON")
    bot_secret: str = Field("", alias="BOT_SECRET")  # Leer = kein Header-Check.
    default_language_code: str = Field("en", alias="DEFAULT_LANGUAGE_CODE")
    intent_attribute: str = Field("df_intent", alias="INTENT_ATTRIBUTE")
    fallback_text: str = Field(
        "Sorry, having trouble right now. Please try again.", alias="FALLBACK_TEXT"
    )
    log_file: str = Field("chat_debug.log", alias="LOG_FILE")

    def missing_required(self) -> List[str]:
        """Listet die Pflichtvariablen auf, die nicht gesetzt sind."""
        missing = []
        if not self.df_project_id:
            missing.append("DF_PROJECT_ID")
        if not self.google_credentials_json:
            missing.append("GOOGLE_APPLICATION_CREDENTIALS_JSON")
        return missing


settings = Settings()


def get_settings() -> Settings:
    return settings
