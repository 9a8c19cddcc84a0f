from dataclasses import dataclass
from http.cookiejar import DefaultCookiePolicy
from typing import Any, Union
import requests
from pydantic import ValidationError
from finance_chatbot.logging_utils import get_logger
from finance_chatbot.schemas import CompletionPayload, UpstreamRequest

logger = get_logger(__name__)

EXTRACTION_SENTINEL = "Could not extract answer from response"

@dataclass(frozen=True)
class Success:
    payload: Any
    outcome: str = "success"

@dataclass(frozen=True)
class TransportFailure:
    description: str
    outcome: str = "transport_error"

@dataclass(frozen=True)
class StatusFailure:
    code: int
    body: str
    outcome: str = "status_error"

@dataclass(frozen=True)
class ParseFailure:
    description: str
    outcome: str = "parse_error"

UpstreamResult = Union[Success, TransportFailure, StatusFailure, ParseFailure]

def _read_body(resp: requests.Response) -> str:
    try:
        return resp.text
    except (requests.RequestException, UnicodeDecodeError):
        return ""

class ResponseRelay:
    """Sends one chat-completion request upstream and classifies the outcome.

    The relay never raises: every outcome is returned as an UpstreamResult
    and rendered to text by render_answer().
    """

    def __init__(self, api_key: str, url: str, timeout: float = 30.0, session: requests.Session | None = None):
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        if session is None:
            session = requests.Session()
            # Upstream Set-Cookie values must not leak into later requests
            session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))
        self.session = session

    @classmethod
    def from_settings(cls, settings, session: requests.Session | None = None) -> "ResponseRelay":
        return cls(
            api_key=settings.OPENAI_KEY,
            url=settings.UPSTREAM_URL,
            timeout=settings.UPSTREAM_TIMEOUT_S,
            session=session,
        )

    def call(self, request: UpstreamRequest) -> UpstreamResult:
        try:
            resp = self.session.post(
                self.url,
                headers={"Authorization": f"Bearer {self.api_key}"},
                json=request.model_dump(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("upstream_transport_error", {"error": str(e)})
            return TransportFailure(description=str(e))

        if not 200 <= resp.status_code < 300:
            body = _read_body(resp)
            logger.warning("upstream_status_error", {"status": resp.status_code, "body": body})
            return StatusFailure(code=resp.status_code, body=body)

        try:
            payload = resp.json()
        except (ValueError, requests.RequestException) as e:
            logger.warning("upstream_parse_error", {"error": str(e)})
            return ParseFailure(description=str(e))

        logger.info("upstream_response", {"payload": payload})
        return Success(payload=payload)

def extract_answer(payload: Any) -> str:
    """Best-effort read of choices[0].message.content; sentinel on any miss."""
    try:
        content = CompletionPayload.model_validate(payload).first_content()
    except ValidationError:
        return EXTRACTION_SENTINEL
    return content if content is not None else EXTRACTION_SENTINEL

def render_answer(result: UpstreamResult) -> str:
    if isinstance(result, TransportFailure):
        return f"Request error: {result.description}"
    if isinstance(result, StatusFailure):
        return f"API error {result.code}: {result.body}"
    if isinstance(result, ParseFailure):
        return f"Parse error: {result.description}"
    return extract_answer(result.payload)
