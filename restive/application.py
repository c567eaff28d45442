import json
import logging
import typing as t

from .request import Request
from .resource import ResourceProtocol
from .response import Response
from .routing import Router
from .sanitizer import Sanitizer

if t.TYPE_CHECKING:
    from _typeshed.wsgi import StartResponse, WSGIEnvironment

LOG = logging.getLogger(__name__)

R = t.TypeVar("R", bound=t.Type[ResourceProtocol])


class Application:
    """
    A WSGI application that routes requests to resources, and serves the responses they produce. Example::

        app = Application()

        @app.route("/projects/<project_id>")
        class Project(Resource):
            def get(self):
                return {"id": self.path_params["project_id"]}

        from werkzeug.serving import run_simple
        run_simple("localhost", 5000, app)
    """

    router: Router

    # behavior configuration
    json_encoder: t.Optional[t.Type[json.JSONEncoder]] = None
    """The JSON encoder class used to serialize structured payloads. Defaults to ``json.JSONEncoder``."""
    sensitive_params: tuple[str, ...] = ("password", "secret", "token")
    """Prefixes of parameter names whose values are masked in the request log."""
    log_requests: bool = True
    """If set to true, every completed request is logged at INFO level."""

    def __init__(
        self,
        router: Router = None,
        json_encoder: t.Type[json.JSONEncoder] = None,
        sensitive_params: t.Iterable[str] = None,
        log_requests: bool = None,
    ) -> None:
        self.router = router or Router()
        if json_encoder is not None:
            self.json_encoder = json_encoder
        if sensitive_params is not None:
            self.sensitive_params = tuple(sensitive_params)
        if log_requests is not None:
            self.log_requests = log_requests
        self.sanitizer = Sanitizer(*self.sensitive_params)

    def route(self, path: str) -> t.Callable[[R], R]:
        """
        Class decorator that adds the decorated resource to the router of the application.

        :param path: the path pattern to match
        """
        return self.router.route(path)

    def handle(self, request: Request) -> Response:
        """
        Resolves the route of the given request and runs a new dispatch cycle.

        :param request: the HTTP request
        :return: the populated response
        """
        request.route, request.path_params = self.router.resolve(request)

        response = Response(request, json_encoder=self.json_encoder)
        response.run()

        if self.log_requests:
            self._log(request, response)

        return response

    def _log(self, request: Request, response: Response) -> None:
        # only log the body if a resource has parsed it already
        params = request.__dict__.get("params")
        LOG.info(
            "%s %s %s query=%s params=%s",
            request.method,
            request.path,
            response.status,
            self.sanitizer.sanitize(request.query),
            self.sanitizer.sanitize(params),
        )

    def __call__(
        self, environ: "WSGIEnvironment", start_response: "StartResponse"
    ) -> t.Iterable[bytes]:
        LOG.debug(
            "%s %s%s",
            environ["REQUEST_METHOD"],
            environ.get("HTTP_HOST"),
            environ.get("RAW_URI") or environ.get("PATH_INFO"),
        )
        response = self.handle(Request(environ))
        return response.to_wsgi_response()(environ, start_response)
