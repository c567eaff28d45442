import enum
import json
import logging
import typing as t

import pydantic
from werkzeug.datastructures import Headers
from werkzeug.wrappers import Response as WerkzeugResponse

from .exceptions import HTTPException
from .request import Request
from .resource import ResultValue

LOG = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"


class ResultKind(enum.Enum):
    EMPTY = "empty"
    TEXT = "text"
    STRUCTURED = "structured"


def classify(value: t.Any) -> ResultKind:
    """
    Decides how a value returned by a resource (or carried by an ``HTTPException``) is rendered.

    :param value: the value
    :return: EMPTY for None, TEXT for strings and bytes, STRUCTURED for anything that is serialized as JSON
    """
    if value is None:
        return ResultKind.EMPTY
    if isinstance(value, (str, bytes, bytearray)):
        return ResultKind.TEXT
    return ResultKind.STRUCTURED


def _to_jsonable(value: t.Any) -> t.Any:
    # pydantic models are converted to plain values before handing them to the encoder
    if isinstance(value, pydantic.BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(element) for element in value]
    if isinstance(value, dict):
        return {k: _to_jsonable(v) for k, v in value.items()}
    return value


class _TransportResponse(WerkzeugResponse):
    # headers are fully determined by the dispatcher, werkzeug must not add a default content type
    default_mimetype = None


class Response:
    """
    The response of one dispatch cycle. It is created for a single request, populated once by ``run``, and then
    handed over to the transport layer::

        response = Response(request)
        response.run()
        response.status, response.headers, response.payload

    ``run`` never raises. Resources abort with a specific outcome by raising an ``HTTPException``; any other
    exception is treated as a bug in the resource and results in a 500 response.
    """

    request: Request
    headers: Headers
    status: t.Optional[int]
    payload: t.Optional[str]

    json_encoder: t.Optional[t.Type[json.JSONEncoder]]

    def __init__(self, request: Request, json_encoder: t.Type[json.JSONEncoder] = None):
        """
        :param request: the request to respond to
        :param json_encoder: optionally the json encoder class to use for serializing structured payloads
        """
        self.request = request
        self.headers = Headers()
        self.status = None
        self.payload = None
        self.json_encoder = json_encoder

    def run(self) -> None:
        """
        Builds the resource of the matched route, runs its callbacks and its action, and populates ``status``,
        ``headers`` and ``payload`` from the outcome.
        """
        route = self.request.route

        if route is None:
            LOG.debug("no route found for %s", self.request.uri)
            self.status = 404
            self.payload = ""
            return

        try:
            resource = route.build_resource(self.request)
            resource.check_callbacks()
            result = resource.call()
            self._set_result(result)
            # resources that don't extend ``Resource`` only need to implement the protocol
            extra_headers = getattr(resource, "response_headers", None)
            if extra_headers:
                self.headers.update(extra_headers)
        except HTTPException as e:
            self._set_error(e)
        except Exception as e:
            self._set_internal_error(e)

    def _set_result(self, result: ResultValue) -> None:
        kind = self._set_payload(result)
        self.status = 204 if kind is ResultKind.EMPTY else 200

    def _set_error(self, e: HTTPException) -> None:
        try:
            self._set_payload(e.payload)
        except Exception as nested:
            self._set_internal_error(nested)
            return

        self.status = e.status
        self.headers.update(e.headers)

    def _set_internal_error(self, e: Exception) -> None:
        msg = "exception while dispatching %s %s"
        if LOG.isEnabledFor(logging.DEBUG):
            LOG.exception(msg, self.request.method, self.request.path)
        else:
            LOG.warning(msg + ": %s", self.request.method, self.request.path, e)

        self.headers.clear()
        self.status = 500
        self.payload = ""

    def _set_payload(self, value: t.Any) -> ResultKind:
        kind = classify(value)

        if kind is ResultKind.EMPTY:
            payload = ""
            content_type = None
        elif kind is ResultKind.TEXT:
            if isinstance(value, (bytes, bytearray)):
                value = value.decode("utf-8", errors="replace")
            payload = value
            content_type = TEXT_CONTENT_TYPE
        else:
            payload = json.dumps(
                _to_jsonable(value), cls=self.json_encoder, separators=(",", ":"), ensure_ascii=False
            )
            content_type = JSON_CONTENT_TYPE

        self.payload = payload
        if payload:
            self.headers["Content-Type"] = content_type
            self.headers["Content-Length"] = str(len(payload.encode("utf-8")))

        return kind

    def to_wsgi_response(self) -> WerkzeugResponse:
        """
        Creates a werkzeug Response from the populated status, headers and payload, which can be served through
        WSGI. Must be called after ``run``.

        :return: a new werkzeug Response
        """
        if self.status is None:
            raise ValueError("response has not been populated yet, call run() first")

        return _TransportResponse(self.payload or None, status=self.status, headers=Headers(self.headers))
