from enum import Enum
from pathlib import Path

from pydantic_settings import BaseSettings


ROOT = Path(__file__).resolve().parents[1]


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Config(BaseSettings):
    env: Env = Env.local
    log_level: str = "INFO"
    html_dir: Path = ROOT / "assets/html"
    assets_dir: Path = ROOT / "assets"
    icons: str = "/assets/img/icons.svg"
    api_url: str = "https://forkify-api.jonas.io/api/v2/recipes/"
    api_key: str | None = None
    timeout_sec: float = 120
    results_per_page: int = 10
    bookmarks_key: str = "bookmarks"
    storage_dir: Path = Path(".forkify")
    default_recipe_id: str = "664c8f193e7aa067e94e897b"
    close_upload_after_sec: float = 2
