import json
import typing as t
from functools import cached_property

import pydantic
from werkzeug.wrappers import Request as WerkzeugRequest

from .exceptions import BadRequest, UnprocessableEntity, UnsupportedMediaType

if t.TYPE_CHECKING:
    from _typeshed.wsgi import WSGIEnvironment

    from .routing import Route

ACTIONS = {
    "GET": "get",
    "HEAD": "head",
    "POST": "post",
    "PUT": "put",
    "PATCH": "patch",
    "DELETE": "delete",
    "OPTIONS": "options",
}

M = t.TypeVar("M", bound=pydantic.BaseModel)


class Request(WerkzeugRequest):
    """
    The HTTP request as seen by a resource. It extends werkzeug's Request with the matched ``route``, the
    semantic ``action`` derived from the HTTP method, and body parsing helpers.
    """

    route: t.Optional["Route"]
    """The route matched for this request, or None if no endpoint matches. Set by the application."""
    action: t.Optional[str]
    """The lower-case action of the request (``get``, ``post``, ...), None for unsupported HTTP methods."""
    path_params: dict[str, t.Any]
    """Variables extracted from the path by the router."""

    def __init__(self, environ: "WSGIEnvironment", *args, **kwargs):
        super().__init__(environ, *args, **kwargs)
        self.route = None
        self.action = ACTIONS.get(self.method)
        self.path_params = {}

    @property
    def uri(self) -> str:
        return self.url

    @property
    def query(self) -> dict[str, str]:
        return self.args.to_dict()

    @cached_property
    def params(self) -> t.Any:
        """
        The request body parsed according to its content type. JSON bodies are decoded into Python values, form
        bodies into a dict of their fields. An empty body yields an empty dict.

        :raises BadRequest: if the body is not valid JSON
        :raises UnsupportedMediaType: if the content type is not JSON or a form
        """
        if self.mimetype in ("application/x-www-form-urlencoded", "multipart/form-data"):
            return self.form.to_dict()

        data = self.get_data()
        if not data:
            return {}

        if self.is_json:
            try:
                return json.loads(data)
            except ValueError as e:
                raise BadRequest(f"invalid JSON body: {e}")

        raise UnsupportedMediaType(f"cannot parse body of type {self.mimetype or 'unknown'}")

    def validate(self, model: t.Type[M]) -> M:
        """
        Validates the parsed body into the given pydantic model.

        :param model: the model class
        :return: the model instance
        :raises UnprocessableEntity: with the list of validation errors as payload
        """
        try:
            return model.model_validate(self.params)
        except pydantic.ValidationError as e:
            raise UnprocessableEntity(json.loads(e.json(include_url=False)))
