"""hellosite: a tiny ASGI server for greeting routes and static assets.

Routes answer first; anything they don't claim is looked up in the static
directory; anything left over is a 404.

Basic usage::

    from hellosite import App

    app = App()

    @app.route("/")
    def index():
        return "Hello, World!"

    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "HTTPError",
    "HelloSiteError",
    "MethodNotAllowed",
    "Middleware",
    "Next",
    "NotFound",
    "Request",
    "Response",
    "StaticFiles",
]

_EXPORTS = {
    "App": "hellosite.app",
    "AppConfig": "hellosite.config",
    "Request": "hellosite.http",
    "Response": "hellosite.http",
    "Middleware": "hellosite.pipeline",
    "Next": "hellosite.pipeline",
    "StaticFiles": "hellosite.static",
    "ConfigurationError": "hellosite.errors",
    "HTTPError": "hellosite.errors",
    "HelloSiteError": "hellosite.errors",
    "MethodNotAllowed": "hellosite.errors",
    "NotFound": "hellosite.errors",
}


def __getattr__(name: str) -> object:
    """Import public names on first access so ``import hellosite`` stays cheap."""
    module = _EXPORTS.get(name)
    if module is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    import importlib

    return getattr(importlib.import_module(module), name)
