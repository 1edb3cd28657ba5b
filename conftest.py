import os

# Tests schreiben kein chat_debug.log und nutzen nie echte Credentials aus Umgebung oder .env.
# Leere Umgebungsvariablen haben Vorrang vor Werten aus einer lokalen .env.
os.environ["LOG_FILE"] = ""
os.environ["BOT_SECRET"] = ""
os.environ["DF_PROJECT_ID"] = ""
os.environ["GOOGLE_APPLICATION_CREDENTIALS_JSON"] = ""
