"""The route table: literal paths mapped to handlers, per method.

No placeholders, no prefixes, no trailing-slash folding. ``/hello`` and
``/hello/`` are different paths, and so are ``/hello`` and ``/Hello``.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from hellosite.errors import ConfigurationError, MethodNotAllowed, NotFound

Handler = Callable[[], Any]


@dataclass(frozen=True, slots=True)
class Route:
    """A handler bound to one literal path for a set of methods."""

    path: str
    handler: Handler
    methods: frozenset[str] = frozenset({"GET"})


def check_path(path: str) -> None:
    """Refuse paths an exact-match table could never serve."""
    if not path.startswith("/"):
        msg = f"Route path {path!r} must start with '/'."
        raise ConfigurationError(msg)
    if any(ch in "{}<>" for ch in path):
        msg = f"Route path {path!r} has a placeholder; routes match literal paths only."
        raise ConfigurationError(msg)


class Router:
    """``path -> method -> Route``, filled during setup and then sealed.

    Usage::

        router = Router([Route("/hello", hello)])
        router.seal()
        router.match("GET", "/hello").handler()
    """

    __slots__ = ("_paths", "_sealed")

    def __init__(self, routes: Iterable[Route] = ()) -> None:
        self._paths: dict[str, dict[str, Route]] = {}
        self._sealed = False
        for route in routes:
            self.add(route)

    def add(self, route: Route) -> None:
        if self._sealed:
            msg = "Router is sealed; add routes before the app starts serving."
            raise RuntimeError(msg)
        check_path(route.path)
        by_method = self._paths.setdefault(route.path, {})
        taken = sorted(by_method.keys() & route.methods)
        if taken:
            msg = f"Duplicate route {taken[0]} {route.path!r}."
            raise ConfigurationError(msg)
        for method in sorted(route.methods):
            by_method[method] = route

    def seal(self) -> None:
        """Freeze the table into read-only views."""
        self._paths = MappingProxyType(  # type: ignore[assignment]
            {path: MappingProxyType(dict(by_method)) for path, by_method in self._paths.items()}
        )
        self._sealed = True

    @property
    def routes(self) -> list[Route]:
        """Each route once, in the order it was added."""
        unique = {id(r): r for by_method in self._paths.values() for r in by_method.values()}
        return list(unique.values())

    def match(self, method: str, path: str) -> Route:
        """The route for ``(method, path)``.

        Raises ``NotFound`` for an unknown path and ``MethodNotAllowed``
        when only the method is wrong.
        """
        by_method = self._paths.get(path)
        if by_method is None:
            raise NotFound(f"no route for {path!r}")
        route = by_method.get(method)
        if route is None:
            raise MethodNotAllowed(by_method)
        return route
