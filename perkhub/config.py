import os
from dotenv import load_dotenv


# Load environment variables
load_dotenv()

ENV = os.environ.get("ENV", "local")

# test uses an in-memory database, local defaults to a sqlite file
DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./perkhub.db")

JWT_SECRET = os.environ.get("JWT_SECRET", "change-me-in-production")
JWT_ALGORITHM = os.environ.get("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24 * 7))

CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# Used by the Streamlit frontend
API_URL = os.environ.get("PERKHUB_API_URL", "http://localhost:8000/api").rstrip("/")
