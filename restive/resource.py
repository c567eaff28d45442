"""
This module holds the resource contract the response dispatcher relies on, and a base class that implements the
common pattern where each action is a method named after the lower-case HTTP method::

    class Project(Resource):
        def exists(self) -> bool:
            return self.path_params["project_id"] in PROJECTS

        def get(self):
            return PROJECTS[self.path_params["project_id"]]

        def delete(self):
            del PROJECTS[self.path_params["project_id"]]

    router.add("/projects/<project_id>", Project)
"""
import typing as t

from werkzeug.datastructures import Headers

from .exceptions import Forbidden, MethodNotAllowed, NotFound, Unauthorized
from .request import ACTIONS, Request

ResultValue = t.Union[
    None,
    str,
    bytes,
    dict[str, t.Any],  # a JSON dict
    list[t.Any],
]


class ResourceProtocol(t.Protocol):
    """
    The contract between the ``Response`` dispatcher and a resource. ``check_callbacks`` is always invoked before
    ``call``, and ``call`` is never invoked if ``check_callbacks`` raises.
    """

    def check_callbacks(self) -> None:
        """
        Run the pre-conditions of the request, like authentication or existence checks.

        :raises HTTPException: to abort the request with a specific response
        """
        raise NotImplementedError

    def call(self) -> ResultValue:
        """
        Perform the action.

        :return: None for an empty response, a string for a text response, or any JSON serializable value
        :raises HTTPException: to abort the request with a specific response
        """
        raise NotImplementedError


class Resource:
    """
    Base class for resources. Subclasses define one method per supported action (``get``, ``post``, ``put``,
    ``patch``, ``delete``), and may override the callbacks ``exists``, ``authorized`` and ``allowed`` which are
    checked in that order before the action is called.
    """

    request: Request
    response_headers: Headers
    """Headers added to the response after the action completed successfully."""

    def __init__(self, request: Request):
        self.request = request
        self.response_headers = Headers()

    @property
    def path_params(self) -> dict[str, t.Any]:
        return self.request.path_params

    @property
    def params(self) -> t.Any:
        return self.request.params

    @property
    def query(self) -> dict[str, str]:
        return self.request.query

    def check_callbacks(self) -> None:
        if not self.method_allowed():
            raise MethodNotAllowed(headers={"Allow": self._allow_header()})
        if not self.exists():
            raise NotFound()
        if not self.authorized():
            raise Unauthorized()
        if not self.allowed():
            raise Forbidden()

    def call(self) -> ResultValue:
        return self._action_method()()

    def method_allowed(self) -> bool:
        return self._action_method() is not None

    def exists(self) -> bool:
        return True

    def authorized(self) -> bool:
        return True

    def allowed(self) -> bool:
        return True

    def options(self) -> None:
        self.response_headers["Allow"] = self._allow_header()

    def allowed_methods(self) -> list[str]:
        """
        :return: the HTTP methods this resource implements, in upper case
        """
        methods = []
        for method, action in ACTIONS.items():
            if self._find_action(action) is not None:
                methods.append(method)
        return methods

    def _allow_header(self) -> str:
        return ", ".join(self.allowed_methods())

    def _action_method(self) -> t.Optional[t.Callable[[], ResultValue]]:
        if self.request.action is None:
            return None
        return self._find_action(self.request.action)

    def _find_action(self, action: str) -> t.Optional[t.Callable[[], ResultValue]]:
        method = getattr(self, action, None)
        if method is None and action == "head":
            # HEAD is served by GET, the body is dropped by the WSGI layer
            method = getattr(self, "get", None)
        if not callable(method):
            return None
        return method
