# config.py
import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()


class Config:
    MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    MONGO_DB_NAME = os.getenv("MONGO_DB_NAME", "taskdesk")

    # JWT config
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "dev_secret_change_me")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=int(os.getenv("JWT_EXPIRES_DAYS", "7")))

    PORT = int(os.getenv("PORT", "4000"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR = os.getenv("LOG_DIR") or None
