# tenant_directory/settings.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional
import logging
from pathlib import Path

# Configure logging for settings module
logger = logging.getLogger(__name__)
if not logging.getLogger().hasHandlers():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s SETTINGS.PY - [%(levelname)s] - %(message)s'
    )

# This settings.py file is at <project>/tenant_directory/settings.py
# Two .parent calls will get to the project root directory
PROJECT_ROOT = Path(__file__).parent.parent.resolve()
DOTENV_PATH = PROJECT_ROOT / ".env"

logger.debug(f"SETTINGS.PY: Determined PROJECT_ROOT as: {PROJECT_ROOT}")

if DOTENV_PATH.exists():
    logger.info(f"SETTINGS.PY: .env file FOUND at explicit path: {DOTENV_PATH}")
else:
    logger.debug(
        f"SETTINGS.PY: .env file NOT FOUND at explicit path: {DOTENV_PATH}. "
        "Will rely on OS env vars or defaults."
    )


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    app_name: str = "Tenant Directory"
    debug_mode: bool = False
    log_level: str = "INFO"

    # Which coordination tree implementation backs the directory ("redis" or "memory")
    coordination_backend: str = "redis"

    # Redis configuration for the shared coordination tree
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: Optional[str] = None
    redis_ssl: bool = False
    redis_key_prefix: str = Field(
        default="tdir",
        description="Namespace prepended to every Redis key owned by the coordination tree."
    )

    # Layout of the tree
    coordination_root_path: str = Field(
        default="/tenant-directory",
        description="Root node under which all instance configuration is stored."
    )
    instance_id: str = Field(
        default="default",
        description="Identifier of the platform instance sharing the coordination store."
    )

    model_config = SettingsConfigDict(
        env_file=DOTENV_PATH if DOTENV_PATH.exists() else None,
        extra="ignore",
        env_file_encoding='utf-8'
    )

    @property
    def instance_configuration_path(self) -> str:
        """Node holding all configuration for this instance."""
        root = self.coordination_root_path.rstrip("/")
        return f"{root}/{self.instance_id}/config"

    @property
    def tenants_configuration_path(self) -> str:
        """Node whose children are the tenant nodes."""
        return f"{self.instance_configuration_path}/tenants"

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug_mode else self.log_level.upper()


# Initialize settings instance
settings = Settings()

# Log configuration values for debugging (sensitive values are masked)
logger.debug(
    f"SETTINGS.PY: coordination_backend='{settings.coordination_backend}', "
    f"redis={settings.redis_host}:{settings.redis_port}/{settings.redis_db}, "
    f"redis_password={'********' if settings.redis_password else 'None'}"
)
logger.debug(
    f"SETTINGS.PY: tenants_configuration_path='{settings.tenants_configuration_path}'"
)
