"""Exceptions raised while setting up or serving a hellosite app."""

from collections.abc import Iterable
from http import HTTPStatus


class HelloSiteError(Exception):
    """Root of everything hellosite raises on purpose."""


class ConfigurationError(HelloSiteError):
    """The app cannot be built: a clashing route, a bad path, no server installed."""


class HTTPError(HelloSiteError):
    """Ends dispatch with a short error page for ``status``.

    The page body is the status reason phrase. ``detail`` goes to the
    debug log only, and ``headers`` are copied onto the page.
    """

    def __init__(
        self,
        status: int,
        detail: str = "",
        headers: tuple[tuple[str, str], ...] = (),
    ) -> None:
        super().__init__(f"{status} {detail}".rstrip())
        self.status = status
        self.detail = detail
        self.headers = headers

    @property
    def reason(self) -> str:
        try:
            return HTTPStatus(self.status).phrase
        except ValueError:
            return f"Error {self.status}"


class NotFound(HTTPError):  # noqa: N818
    """No route owns the path and no static file backs it."""

    def __init__(self, detail: str = "") -> None:
        super().__init__(404, detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """The path is routed, just not for this method."""

    def __init__(self, allowed: Iterable[str], detail: str = "") -> None:
        self.allowed = tuple(sorted(allowed))
        super().__init__(405, detail, headers=(("Allow", ", ".join(self.allowed)),))
