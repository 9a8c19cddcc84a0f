import sys
import os
import json
import pytest
import requests
from unittest.mock import MagicMock

# Ensure project root is on sys.path so 'finance_chatbot' package resolves
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

# Settings require a credential at import time
os.environ.setdefault("OPENAI_KEY", "test-key")

from finance_chatbot.llm.relay import ResponseRelay  # noqa: E402

def make_response(status_code: int, body) -> requests.Response:
    """Build a real requests.Response without touching the network."""
    resp = requests.Response()
    resp.status_code = status_code
    if isinstance(body, (dict, list)):
        body = json.dumps(body)
    resp._content = body.encode("utf-8") if isinstance(body, str) else body
    resp.encoding = "utf-8"
    return resp

@pytest.fixture
def mock_session():
    return MagicMock(spec=requests.Session)

@pytest.fixture
def relay(mock_session):
    return ResponseRelay(
        api_key="sk-test",
        url="https://upstream.test/v1/chat/completions",
        timeout=5.0,
        session=mock_session,
    )
