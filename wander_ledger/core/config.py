from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

ALLOWED_STORAGE_BACKENDS = {"sqlite", "memory"}
ALLOWED_RATE_PROVIDERS = {"mock-jitter", "static"}


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG,
    DATA_DIR, STORAGE_BACKEND, RATE_PROVIDER, AUTO_REFRESH_RATES).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "Wander Ledger"
    debug: bool = True
    version: str = "0.1.0"

    # Data & persistence
    data_dir: Path = Path("data")
    db_filename: str = "wander.sqlite3"
    db_path: Optional[Path] = None  # derived if not provided
    storage_backend: str = "sqlite"
    storage_namespace: str = "wander"

    # Exchange rates
    # Allowed: 'mock-jitter' (static table perturbed on refresh), 'static' (no perturbation)
    rate_provider: str = "mock-jitter"
    rate_jitter_pct: float = 1.0
    auto_refresh_rates: bool = False
    rate_refresh_interval_minutes: int = 60

    # Preferences seed
    default_home_currency: str = "USD"

    def init_post_load(self) -> None:
        """Finalize derived fields and ensure directories exist."""
        if self.storage_backend not in ALLOWED_STORAGE_BACKENDS:
            raise ValueError(
                f"Unsupported storage_backend '{self.storage_backend}'. Allowed: {ALLOWED_STORAGE_BACKENDS}"
            )
        if self.rate_provider not in ALLOWED_RATE_PROVIDERS:
            raise ValueError(
                f"Unsupported rate_provider '{self.rate_provider}'. Allowed: {ALLOWED_RATE_PROVIDERS}"
            )
        if not (0 <= self.rate_jitter_pct < 100):
            raise ValueError("rate_jitter_pct must be within [0, 100)")
        if self.rate_refresh_interval_minutes <= 0:
            raise ValueError("rate_refresh_interval_minutes must be positive")
        self.default_home_currency = self.default_home_currency.upper()
        if self.storage_backend == "memory":
            return
        if self.db_path is None:
            self.db_path = self.data_dir / self.db_filename
        # Ensure persistence directory exists
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
