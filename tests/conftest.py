import os
import sys

import httpx
import pytest

# Ensure repository root is on sys.path before importing project modules.
repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

from monad_mcp.agent_kit import Session  # noqa: E402
from monad_mcp.client import MonadClient  # noqa: E402
from monad_mcp.config import MonadConfig  # noqa: E402
from monad_mcp.metrics import default_metrics  # noqa: E402

WALLET = "0xABC"


class StubProvider:
    """
    Records every action call and answers from ``responses``.

    A response that is an exception instance is raised instead of returned.
    """

    def __init__(self, **responses):
        self.responses = responses
        self.calls = []
        self.closed = False

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)

        async def _action(session, *args, **kwargs):
            self.calls.append((name, args, kwargs))
            value = self.responses.get(name, {})
            if isinstance(value, Exception):
                raise value
            return value

        return _action

    async def aclose(self):
        self.closed = True


class StubHttp:
    """Answers GET requests from a queue of (status, kwargs) or exceptions."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []
        self.closed = False

    async def get(self, url, params=None, **kwargs):
        self.calls.append({"url": url, "params": params})
        if not self.responses:
            raise AssertionError("No stub HTTP responses left")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        status, body = item
        return httpx.Response(status, request=httpx.Request("GET", url), **body)

    async def aclose(self):
        self.closed = True


@pytest.fixture(autouse=True)
def reset_metrics():
    default_metrics.reset()
    yield
    default_metrics.reset()


@pytest.fixture
def session():
    return Session(private_key="0x" + "11" * 32, rpc_url="https://rpc.test/", wallet_address=WALLET)


@pytest.fixture
def make_client(session):
    def _make(provider=None, http=None, config=None):
        return MonadClient(
            session,
            provider if provider is not None else StubProvider(),
            config=config or MonadConfig(private_key=session.private_key),
            http=http if http is not None else StubHttp(),
        )

    return _make


@pytest.fixture
def stub_provider():
    return StubProvider


@pytest.fixture
def stub_http():
    return StubHttp
