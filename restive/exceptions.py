import typing as t

from werkzeug.datastructures import Headers
from werkzeug.http import HTTP_STATUS_CODES


class HTTPException(Exception):
    """
    Raised by resources (or the framework itself) to abort processing of a request with a specific HTTP status.
    The payload is sent back to the client, and may either be free text, in which case it is rendered as
    ``text/plain``, or a structured value (a dict, list, ...) that is serialized as JSON. Example::

        class Project(Resource):
            def get(self):
                if not self.request.authorization:
                    raise HTTPException(418, {"error": "no tea without a token"})
                ...
    """

    status: int
    payload: t.Any
    headers: Headers
    message: str

    def __init__(
        self,
        status: int,
        payload: t.Any = None,
        headers: t.Union[Headers, t.Mapping[str, str]] = None,
        message: str = None,
    ):
        """
        :param status: the HTTP status code of the response
        :param payload: an optional body, either a string or a JSON serializable value
        :param headers: additional headers to add to the response
        :param message: a human-readable description, defaults to the reason phrase of the status code
        """
        if not 100 <= status <= 599:
            raise ValueError(f"invalid HTTP status code {status}")

        self.status = status
        self.payload = payload
        self.headers = Headers(headers) if headers else Headers()
        self.message = message or HTTP_STATUS_CODES.get(status, "Unknown Status")
        super().__init__(self.message)

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.status}: {self.message}>"


class _StatusException(HTTPException):
    code: int

    def __init__(self, payload: t.Any = None, headers: t.Mapping[str, str] = None, message: str = None):
        super().__init__(self.code, payload, headers, message)


class BadRequest(_StatusException):
    code = 400


class Unauthorized(_StatusException):
    code = 401


class Forbidden(_StatusException):
    code = 403


class NotFound(_StatusException):
    code = 404


class MethodNotAllowed(_StatusException):
    code = 405


class NotAcceptable(_StatusException):
    code = 406


class Conflict(_StatusException):
    code = 409


class Gone(_StatusException):
    code = 410


class UnsupportedMediaType(_StatusException):
    code = 415


class UnprocessableEntity(_StatusException):
    code = 422
