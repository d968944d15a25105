# keeptrack/config.py

import os
from dotenv import load_dotenv


load_dotenv()


# -------------------------------
# Database
# -------------------------------

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/keeptrack.db")


# -------------------------------
# Authentication
# -------------------------------

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_IN = int(os.getenv("JWT_EXPIRES_IN", "604800"))  # seconds, 7 days

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))


# -------------------------------
# HTTP
# -------------------------------

API_PREFIX = os.getenv("API_PREFIX", "/api")
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:8501")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
