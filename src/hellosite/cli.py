"""The ``hellosite`` command.

    hellosite run [APP] [--host H] [--port P] [--production] [--workers N]
    hellosite routes [APP]

``APP`` is ``"module:attribute"`` (default ``hellosite.site:app``); the
attribute may be an App or a function returning one.
"""

import argparse
import importlib
import logging
import sys

from hellosite.app import App

DEFAULT_APP = "hellosite.site:app"

logger = logging.getLogger("hellosite.cli")


def configure_logging(level: str = "info") -> None:
    """Print hellosite's own log records to stderr at ``level`` and above.

    Only the ``hellosite`` logger is touched; calling this twice does not
    add a second handler.
    """
    root = logging.getLogger("hellosite")
    root.setLevel(level.upper())
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)


def resolve_app(target: str) -> App:
    """Import ``target`` and return the App it names.

    Raises ``ModuleNotFoundError``/``AttributeError`` when it can't be
    found and ``TypeError`` when it isn't an App (or a factory for one).
    """
    module_name, _, attr = target.partition(":")
    obj = getattr(importlib.import_module(module_name), attr or "app")
    if callable(obj) and not isinstance(obj, App):
        obj = obj()
    if not isinstance(obj, App):
        msg = f"{target!r} is a {type(obj).__name__}, not a hellosite.App"
        raise TypeError(msg)
    return obj


def _load(target: str) -> App:
    try:
        return resolve_app(target)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def _run(args: argparse.Namespace) -> None:
    app = _load(args.app)
    configure_logging(app.config.log_level)
    # Seal now so a broken app fails before the server starts
    app.routes  # noqa: B018

    host = args.host or app.config.host
    port = args.port or app.config.port
    logger.info("Server is running on http://%s:%d", host, port)

    if args.production or not app.config.debug:
        from hellosite.serve import run_production_server

        workers = app.config.workers if args.workers is None else args.workers
        run_production_server(app, host, port, workers=workers, log_level=app.config.log_level)
    else:
        from hellosite.serve import run_dev_server

        run_dev_server(app, host, port, app_path=args.app, log_level=app.config.log_level)


def _routes(args: argparse.Namespace) -> None:
    app = _load(args.app)
    header = ("METHOD", "PATH", "HANDLER")
    rows = [
        (", ".join(sorted(r.methods)), r.path, getattr(r.handler, "__name__", repr(r.handler)))
        for r in app.routes
    ]
    if not rows:
        print("No routes registered.")
    else:
        method_w = max(len(row[0]) for row in (header, *rows))
        path_w = max(len(row[1]) for row in (header, *rows))
        for methods, path, handler in (header, *rows):
            print(f"{methods:<{method_w}}  {path:<{path_w}}  {handler}")
    if app.config.static_dir is not None:
        print(f"\nStatic files: {app.config.static_url} -> {app.config.static_dir}")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="hellosite", description="Greeting routes and static files over ASGI."
    )
    commands = parser.add_subparsers(dest="command")

    run = commands.add_parser("run", help="serve an app")
    run.add_argument("app", nargs="?", default=DEFAULT_APP, help=f"default: {DEFAULT_APP}")
    run.add_argument("--host", help="bind address (default: from the app config)")
    run.add_argument("--port", type=int, help="bind port (default: from the app config)")
    run.add_argument("--production", action="store_true", help="use worker processes")
    run.add_argument("--workers", type=int, help="worker count, 0 for auto")
    run.set_defaults(handler=_run)

    routes = commands.add_parser("routes", help="list an app's routes")
    routes.add_argument("app", nargs="?", default=DEFAULT_APP, help=f"default: {DEFAULT_APP}")
    routes.set_defaults(handler=_routes)

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        raise SystemExit(0)
    args.handler(args)
