"""Settings for a hellosite app.

One frozen dataclass: build it once, hand it to ``App``, and derive
variants with ``dataclasses.replace``.
"""

from dataclasses import dataclass
from pathlib import Path

DEFAULT_STATIC_DIR = "public"


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Where to listen, what to serve from disk, and how loudly to log.

    ``static_dir=None`` switches the static fallback off; a directory
    that does not exist does the same, quietly.
    """

    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False  # single reloading worker instead of the production server
    workers: int = 0  # production only; 0 lets pounce size the pool

    static_dir: str | Path | None = DEFAULT_STATIC_DIR
    static_url: str = "/"
    static_index: str = "index.html"
    static_cache_control: str = "public, max-age=3600"

    log_level: str = "info"
