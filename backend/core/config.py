import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    database_url: str = os.getenv(
        "DATABASE_URL",
        "sqlite+aiosqlite:///./cocktails.db"
    )
    database_echo: bool = os.getenv("DATABASE_ECHO", "False").lower() == "true"

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "4000"))

    # Image uploads
    upload_dir: str = os.getenv("UPLOAD_DIR", "uploads")
    max_upload_bytes: int = int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))

    seed_on_startup: bool = os.getenv("SEED_ON_STARTUP", "False").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Used by the client package
    api_url: str = os.getenv("COCKTAIL_API_URL", "http://localhost:4000")


settings = Settings()
