import threading
import typing as t

from werkzeug.exceptions import NotFound
from werkzeug.routing import Map, Rule

from .request import Request
from .resource import ResourceProtocol

R = t.TypeVar("R", bound=t.Type[ResourceProtocol])


class Route:
    """
    Binds a path pattern to a resource class, and creates a new resource instance for every request matching the
    pattern.
    """

    path: str
    resource_class: t.Callable[[Request], ResourceProtocol]

    def __init__(self, path: str, resource_class: t.Callable[[Request], ResourceProtocol]):
        self.path = path
        self.resource_class = resource_class

    def build_resource(self, request: Request) -> ResourceProtocol:
        return self.resource_class(request)

    def __repr__(self):
        name = getattr(self.resource_class, "__name__", repr(self.resource_class))
        return f"<Route {self.path} -> {name}>"


def _clone_map(old: Map) -> Map:
    """
    Creates a new copy of the existing map, with fresh unbound copies of all its containing rules.

    :param old: the map to copy
    :return: a new instance of the map
    """
    new = Map(
        strict_slashes=old.strict_slashes,
        merge_slashes=old.merge_slashes,
        redirect_defaults=old.redirect_defaults,
        converters=old.converters,
    )

    for old_rule in old.iter_rules():
        new.add(old_rule.empty())

    return new


class Router:
    """
    A Router matches request paths to routes using werkzeug's URL map. Paths use werkzeug's rule syntax,
    e.g., ``/projects/<int:project_id>``. Only the path is matched; whether the resource supports the HTTP method
    of the request is decided by the resource itself.
    """

    url_map: Map

    def __init__(self):
        self.url_map = Map(strict_slashes=False, merge_slashes=False, redirect_defaults=False)
        self._mutex = threading.RLock()

    @property
    def routes(self) -> list[Route]:
        return [rule.endpoint for rule in self.url_map.iter_rules()]

    def add(self, path: str, resource_class: t.Callable[[Request], ResourceProtocol]) -> Route:
        """
        Creates a new Route and adds it to the URL map. Like werkzeug's ``Map.add``, but the map is cloned and
        replaced, so requests that are being resolved concurrently are not affected.

        :param path: the path pattern to match
        :param resource_class: the callable creating a resource from a request, typically a ``Resource`` subclass
        :return: the route that was created
        """
        route = Route(path, resource_class)

        with self._mutex:
            new = _clone_map(self.url_map)
            new.add(Rule(path, endpoint=route))
            self.url_map = new

        return route

    def route(self, path: str) -> t.Callable[[R], R]:
        """
        Class decorator that adds the decorated resource class to the router::

            @router.route("/projects/<project_id>")
            class Project(Resource):
                def get(self):
                    ...

        :param path: the path pattern to match
        :return: the decorator, which returns the class unmodified
        """

        def wrapper(cls: R) -> R:
            self.add(path, cls)
            return cls

        return wrapper

    def resolve(self, request: Request) -> tuple[t.Optional[Route], dict[str, t.Any]]:
        """
        Matches the path of the given request against the registered routes.

        :param request: the HTTP request
        :return: a tuple of the matching route and the extracted path parameters, or ``(None, {})``
        """
        matcher = self.url_map.bind(request.host)
        try:
            route, args = matcher.match(request.path)
        except NotFound:
            return None, {}
        return route, args
