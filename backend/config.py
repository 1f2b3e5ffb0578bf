import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


class Settings(BaseModel):
    data_dir: Path = Path("data")

    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"
    vision_model: str = "gpt-4o-mini"
    max_tokens: int = 300
    request_timeout: Optional[float] = None  # None = requests' own default

    front_origins: str = "*"
    log_level: str = "INFO"

    @property
    def uploads_dir(self) -> Path:
        return self.data_dir / "uploads"

    @property
    def processed_dir(self) -> Path:
        return self.data_dir / "processed"

    @property
    def entries_path(self) -> Path:
        return self.data_dir / "entries.json"

    @property
    def allow_origins(self) -> List[str]:
        if not self.front_origins or self.front_origins == "*":
            return ["*"]
        return [o.strip() for o in self.front_origins.split(",") if o.strip()]


def _env_float(name: str) -> Optional[float]:
    raw = os.getenv(name, "").strip()
    return float(raw) if raw else None


def load_settings() -> Settings:
    """환경변수(.env 포함)에서 설정을 읽는다."""
    return Settings(
        data_dir=Path(os.getenv("COMPANION_DATA_DIR", "data")),
        openai_api_key=os.getenv("OPENAI_API_KEY", "").strip(),
        openai_base_url=os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").rstrip("/"),
        vision_model=os.getenv("VISION_MODEL", "gpt-4o-mini"),
        max_tokens=int(os.getenv("VISION_MAX_TOKENS", "300")),
        request_timeout=_env_float("VISION_TIMEOUT"),
        front_origins=os.getenv("FRONT_ORIGINS", "*"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
