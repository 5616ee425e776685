import os
import httpx
import pytest
from fastapi.testclient import TestClient

from schedule_sensei.api import app
from schedule_sensei.models import Task


@pytest.fixture(scope="session")
def resources_dir():
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "resources")


@pytest.fixture(scope="session")
def sample_xml_path(resources_dir):
    return os.path.join(resources_dir, "sample_schedule.xml")


@pytest.fixture(scope="session")
def sample_xml(sample_xml_path):
    with open(sample_xml_path, "rb") as f:
        return f.read()


@pytest.fixture
def excavate_tasks():
    return [
        Task.model_validate({
            "id": 1,
            "name": "Excavate",
            "duration": "PT64H0M0S",
            "predecessors": [],
            "successors": [{"id": 2, "type": 1, "lag": "PT0H"}],
        })
    ]


@pytest.fixture
def completion_payload():
    def make(content: str) -> dict:
        return {
            "id": "chatcmpl-test",
            "object": "chat.completion",
            "created": 1700000000,
            "model": "gpt-4",
            "choices": [
                {
                    "index": 0,
                    "message": {"role": "assistant", "content": content},
                    "finish_reason": "stop",
                }
            ],
            "usage": {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
        }

    return make


@pytest.fixture
def stub_service():
    """
    Build an httpx client whose transport answers like the chat-completion
    endpoint. Returns (client, requests) so tests can inspect what was sent.
    """
    def make(status_code: int = 200, payload=None, raise_exc: Exception = None,
             content: bytes = None, content_type: str = "application/json"):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if raise_exc is not None:
                raise raise_exc
            if content is not None:
                return httpx.Response(status_code, content=content, headers={"content-type": content_type})
            return httpx.Response(status_code, json=payload)

        return httpx.AsyncClient(transport=httpx.MockTransport(handler)), requests

    return make


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as c:
        yield c
