import logging
import os
import socket
import pytest
from pgcheck.exceptions import ConnectionError, LivenessError, QueryError

class FakeConnector:
    """
    Stands in for a PostgresConnector: answers scalar queries from a dict
    and counts how often the connection is opened and released.
    """
    def __init__(self, responses=None, fail_connect=False, fail_ping=False, fail_query=None):
        self.responses = responses or {}
        self.fail_connect = fail_connect
        self.fail_ping = fail_ping
        self.fail_query = fail_query
        self.credentials = None
        self.timeout = None
        self.connect_calls = 0
        self.close_calls = 0
        self.queries = []
        self._open = False

    def connect(self):
        self.connect_calls += 1
        if self.fail_connect:
            raise ConnectionError("error connecting to postgres: connection refused")
        self._open = True

    def ping(self):
        if self.fail_ping:
            raise LivenessError("error pinging postgres: server closed the connection unexpectedly")

    def scalar(self, query, name=None):
        self.queries.append(query)
        if name is not None and name == self.fail_query:
            raise QueryError(name, f"error querying postgres {name}: permission denied")
        return self.responses[query]

    def close(self):
        if self._open:
            self._open = False
            self.close_calls += 1

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

def server_responses(max_connections="100", reserved="3", current=50):
    return {
        "SHOW max_connections": max_connections,
        "SHOW superuser_reserved_connections": reserved,
        "SELECT count(*) FROM pg_stat_activity": current,
    }

@pytest.fixture
def fake_server(monkeypatch):
    """
    Route the checks to a FakeConnector. Returns a function that installs
    a connector built with the given arguments and hands it back.
    """
    def install(**kwargs):
        connector = FakeConnector(**kwargs)

        def get_connector(credentials, timeout=None):
            connector.credentials = credentials
            connector.timeout = timeout
            return connector

        monkeypatch.setattr("pgcheck.probe.checker.get_connector", get_connector)
        return connector
    return install

@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep PGCHECK_* variables of the developer's shell out of the tests."""
    for key in list(os.environ):
        if key.startswith("PGCHECK_"):
            monkeypatch.delenv(key)

@pytest.fixture(autouse=True)
def reset_logger():
    """setup_logger binds a handler to the stderr of the CliRunner that created it."""
    yield
    logger = logging.getLogger("pgcheck")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

@pytest.fixture
def closed_port():
    """A local TCP port nothing listens on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return port
