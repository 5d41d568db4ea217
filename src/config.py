"""Configuration module for the Registrar Portal API.

This module provides centralized configuration management, including directory
paths, API server settings, authentication settings, and the business
constants of the document request workflow. All configuration values that
depend on the deployment can be overridden via environment variables.
"""

import os
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Directory Configuration ---

# Root directory of the project
ROOT_DIR = Path(__file__).parent.parent.resolve()

# Data directory (holds the default SQLite database)
DATA_DIR_NAME = os.getenv("DATA_DIR", "data")
DATA_DIR = ROOT_DIR / DATA_DIR_NAME

# --- Database Configuration ---

DATABASE_URL: str = os.getenv(
    "DATABASE_URL", f"sqlite:///{DATA_DIR}/registrar_portal.db"
)

# --- API Server Configuration ---

API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "8000"))

# CORS allowed origins (comma-separated list)
# Default includes local development addresses. For production, set via
# CORS_ALLOWED_ORIGINS environment variable.
_CORS_ALLOWED_ORIGINS_STR: str = os.getenv(
    "CORS_ALLOWED_ORIGINS",
    "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000,"
    "http://127.0.0.1:3000",
)
CORS_ALLOWED_ORIGINS: List[str] = [
    origin.strip()
    for origin in _CORS_ALLOWED_ORIGINS_STR.split(",")
    if origin.strip()
]

# --- Logging Configuration ---

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Authentication Configuration ---

JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY", "your-secret-key-change-in-production")
JWT_ALGORITHM: str = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES: int = int(
    os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24 * 7))  # 7 days
)

# Admin token for admin seeding (set via ADMIN_TOKEN environment variable)
ADMIN_TOKEN: Optional[str] = os.getenv("ADMIN_TOKEN")

# Default admin account created at startup when a password is configured
DEFAULT_ADMIN_EMAIL: str = os.getenv("DEFAULT_ADMIN_EMAIL", "admin@example.com")
DEFAULT_ADMIN_PASSWORD: Optional[str] = os.getenv("DEFAULT_ADMIN_PASSWORD")

# --- Roles ---

ROLE_STUDENT = "student"
ROLE_ADMIN = "admin"
ROLES: List[str] = [ROLE_STUDENT, ROLE_ADMIN]

# --- Document Request Configuration ---

PRICE_PER_COPY: int = 150
MAX_COPIES_PER_REQUEST: int = 2
MAX_ACTIVE_REQUESTS: int = 2

# Mapping of document type codes to display labels
DOCUMENT_TYPES: Dict[str, str] = {
    "tor": "Transcript of Records (TOR)",
    "diploma": "Diploma",
    "certificate": "Certificate of Enrollment",
    "grades": "Certificate of Grades",
    "honorable": "Honorable Dismissal",
}

REQUEST_STATUS_PENDING = "pending"
REQUEST_STATUS_PROCESSING = "processing"
REQUEST_STATUS_READY = "ready"
REQUEST_STATUS_COMPLETED = "completed"
REQUEST_STATUSES: List[str] = [
    REQUEST_STATUS_PENDING,
    REQUEST_STATUS_PROCESSING,
    REQUEST_STATUS_READY,
    REQUEST_STATUS_COMPLETED,
]

# --- Messaging Configuration ---

SYSTEM_SENDER_ID = "system"
SYSTEM_SENDER_NAME = "System"

REQUEST_RECEIVED_MESSAGE = (
    "Your request has been received. Please upload proof of payment."
)

# System message appended when a request enters the given status.
# Statuses missing from this table produce no message.
STATUS_CHANGE_MESSAGES: Dict[str, str] = {
    REQUEST_STATUS_PROCESSING: "Payment confirmed. Your request is now being processed.",
    REQUEST_STATUS_READY: "Your document is ready for pickup!",
    REQUEST_STATUS_COMPLETED: "Request completed. Thank you!",
}

# --- Support Ticket Configuration ---

TICKET_STATUS_OPEN = "open"
TICKET_STATUS_IN_PROGRESS = "in_progress"
TICKET_STATUS_RESOLVED = "resolved"
TICKET_STATUSES: List[str] = [
    TICKET_STATUS_OPEN,
    TICKET_STATUS_IN_PROGRESS,
    TICKET_STATUS_RESOLVED,
]
