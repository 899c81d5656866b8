import logging
import os


class EnvironmentVariables:
    @property
    def host(self) -> str:
        return os.environ.get("USER_SERVICE_HOST", "0.0.0.0")

    @property
    def port(self) -> int:
        return int(os.environ.get("USER_SERVICE_PORT", 3000))

    @property
    def log_level(self) -> str:
        level = os.environ.get("LOG_LEVEL", "INFO").upper()
        # getLevelName maps known names to their numeric level
        return level if isinstance(logging.getLevelName(level), int) else "INFO"

    @property
    def cors_allow_origins(self) -> list[str]:
        origins: str | None = os.environ.get("CORS_ALLOW_ORIGINS")
        if not origins:
            return ["*"]
        return [origin.strip() for origin in origins.split(",") if origin.strip()]

    @staticmethod
    def str2bool(v: str | None) -> bool:
        return v is not None and str(v).lower() in ("yes", "true", "t", "1", "y")

    @property
    def seed_sample_users(self) -> bool:
        value: str | None = os.environ.get("SEED_SAMPLE_USERS")
        if value is None:
            return True
        return self.str2bool(value)
