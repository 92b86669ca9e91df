"""The greeting site: two text routes and the bundled ``public/`` assets.

Run:
    python -m hellosite.site
"""

from dataclasses import replace
from pathlib import Path

from hellosite.app import App
from hellosite.cli import configure_logging
from hellosite.config import DEFAULT_STATIC_DIR, AppConfig

PUBLIC_DIR = Path(__file__).parent / "public"


def create_app(config: AppConfig | None = None) -> App:
    """Build the greeting app.

    Without a config, serves ``PUBLIC_DIR`` at ``/`` on port 3000. A
    config with ``static_dir="public"`` (the default) is pointed at the
    bundled directory too, so overrides only need to name what changes.
    """
    config = config or AppConfig()
    if config.static_dir == DEFAULT_STATIC_DIR:
        config = replace(config, static_dir=PUBLIC_DIR)

    app = App(config)

    @app.route("/")
    def index():
        return "Hello, World!"

    @app.route("/hello")
    def hello():
        return "Hello, From hello route!"

    return app


app = create_app()


if __name__ == "__main__":
    configure_logging(app.config.log_level)
    app.run()
