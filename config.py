from typing import Final

from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path
BASE_DIR = Path(__file__).resolve().parent

class Settings(BaseSettings):
    # =========================
    # Logging
    # =========================
    log_level: str = "INFO"
    log_dir: Path = BASE_DIR / "logs"

    # =========================
    # Match ranking
    # =========================
    match_top_limit: int = 10

    # batches at least this large are scored on a thread pool
    match_parallel_threshold: int = 500
    match_max_workers: int = 4

    model_config = SettingsConfigDict(
        env_file=BASE_DIR/".env",
        case_sensitive=False,
        extra="ignore",
    )

settings = Settings()

# =========================
# Frequently used aliases: Constant
# =========================
MATCH_TOP_LIMIT: Final[int] = settings.match_top_limit
MATCH_PARALLEL_THRESHOLD: Final[int] = settings.match_parallel_threshold
MATCH_MAX_WORKERS: Final[int] = settings.match_max_workers
