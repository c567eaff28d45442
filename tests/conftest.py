import threading

import pytest
from werkzeug import serving

from restive import Application, Request


@pytest.fixture
def serve_wsgi_app():
    servers: list[serving.BaseWSGIServer] = []

    def _serve(app, host: str = "localhost", port: int = None) -> serving.BaseWSGIServer:
        srv = serving.make_server(host, port or 0, app, threaded=True)
        threading.Thread(
            target=srv.serve_forever, name=f"test-server-{srv.port}", daemon=True
        ).start()
        servers.append(srv)
        srv.url = f"http://{srv.host}:{srv.port}"
        return srv

    yield _serve

    for server in servers:
        server.shutdown()


@pytest.fixture
def app_server(serve_wsgi_app) -> tuple[Application, serving.BaseWSGIServer]:
    """Creates a new Application, serves it through a werkzeug dev server, and returns both."""
    app = Application()
    return app, serve_wsgi_app(app)


@pytest.fixture
def make_request():
    def _create(path: str = "/test", method: str = "GET", **kwargs) -> Request:
        return Request.from_values(path, base_url="http://test.com", method=method, **kwargs)

    return _create
