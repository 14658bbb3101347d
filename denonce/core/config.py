import os
from dotenv import load_dotenv

load_dotenv()


def as_bool(val, default=False):
    if isinstance(val, bool):
        return val
    if val is None:
        return default
    return str(val).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./denonce.db")

    # JWT
    JWT_SECRET: str = os.getenv("JWT_SECRET", "your-super-secret-key-change-in-production")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    # token lifetime is fixed at 24h, not configurable
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS") or 12)

    # tracking code allocation
    TRACKING_CODE_MAX_ATTEMPTS: int = int(os.getenv("TRACKING_CODE_MAX_ATTEMPTS") or 5)

    CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
    SEED_ON_STARTUP: bool = as_bool(os.getenv("SEED_ON_STARTUP"), True)
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
