from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional


_TRUTHY = ("1", "true", "yes")


def load_dotenv(path: str | Path = ".env.local") -> None:
    """Load KEY=VALUE lines from a local env file. Variables already set are kept."""
    env_file = Path(path)
    if not env_file.exists():
        return
    with open(env_file, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                key, value = line.split("=", 1)
                os.environ.setdefault(key.strip(), value.strip())


@dataclass(frozen=True)
class Settings:
    log_level: str = "WARNING"
    strict: bool = False
    root: Path = Path(".fieldkit")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        return cls(
            log_level=env.get("FIELDKIT_LOG_LEVEL", "WARNING").upper(),
            strict=env.get("FIELDKIT_STRICT", "0").lower() in _TRUTHY,
            root=Path(env.get("FIELDKIT_ROOT", ".fieldkit")),
        )
