from .application import Application
from .exceptions import HTTPException
from .request import Request
from .resource import Resource, ResourceProtocol
from .response import Response, ResultKind, classify
from .routing import Route, Router

__all__ = [
    "Application",
    "HTTPException",
    "Request",
    "Resource",
    "ResourceProtocol",
    "Response",
    "ResultKind",
    "Route",
    "Router",
    "classify",
]
