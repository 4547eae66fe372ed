from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


ENV_PREFIX = "SEATING_DESIGNER_"


def _env_int(name: str, default: int, *, minimum: int = 0, environ: Optional[dict] = None) -> int:
    env = os.environ if environ is None else environ
    raw = env.get(ENV_PREFIX + name)
    if raw is None or str(raw).strip() == "":
        return default
    try:
        value = int(str(raw).strip())
    except ValueError:
        return default
    return value if value >= minimum else default


@dataclass(frozen=True)
class DesignerSettings:
    click_window_ms: int = 300
    max_grid: int = 20
    min_box: int = 5
    canvas_width: int = 800
    canvas_height: int = 600
    theme: str = "light"

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "DesignerSettings":
        env = os.environ if environ is None else environ
        theme = str(env.get(ENV_PREFIX + "THEME", "light")).strip().lower()
        if theme not in ("light", "dark"):
            theme = "light"
        return cls(
            click_window_ms=_env_int("CLICK_WINDOW_MS", 300, minimum=1, environ=env),
            max_grid=_env_int("MAX_GRID", 20, minimum=1, environ=env),
            min_box=_env_int("MIN_BOX", 5, minimum=0, environ=env),
            canvas_width=_env_int("CANVAS_WIDTH", 800, minimum=1, environ=env),
            canvas_height=_env_int("CANVAS_HEIGHT", 600, minimum=1, environ=env),
            theme=theme,
        )


@lru_cache(maxsize=1)
def get_settings() -> DesignerSettings:
    return DesignerSettings.from_env()
