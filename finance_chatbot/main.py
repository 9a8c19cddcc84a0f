from fastapi import FastAPI, Depends
from fastapi.responses import PlainTextResponse
from time import perf_counter
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from finance_chatbot.config import settings
from finance_chatbot.schemas import ChatRequest, ChatResponse
from finance_chatbot.logging_utils import configure_logging, get_logger, with_request_id
from finance_chatbot.llm.prompt import build_upstream_request, estimate_input_tokens
from finance_chatbot.llm.relay import ResponseRelay, render_answer

app = FastAPI(title="Finance Chatbot API", version=settings.SERVICE_VERSION)
configure_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)

# Prometheus metrics
HTTP_REQUESTS = Counter("http_requests_total", "Total HTTP requests", ["path", "method", "status"])
HTTP_LATENCY = Histogram("http_request_latency_ms", "Latency (ms)", buckets=(50,100,200,400,800,1600,3200,6400))
UPSTREAM_OUTCOMES = Counter(
    "upstream_outcomes_total",
    "Chat-completion call outcomes",
    ["outcome"]
)

_relay = ResponseRelay.from_settings(settings)

def get_relay() -> ResponseRelay:
    return _relay

def build_health_payload():
    # Reports configuration only; no outbound call
    upstream_status = "configured" if settings.OPENAI_KEY else "unconfigured"
    return {
        "status": "ok" if upstream_status == "configured" else "degraded",
        "version": app.version,
        "checks": {
            "upstream": upstream_status,
        }
    }

@app.get("/health")
def health():
    return build_health_payload()


@app.get("/metrics")
def metrics():
    data = generate_latest()
    return PlainTextResponse(content=data.decode("utf-8"), media_type=CONTENT_TYPE_LATEST)

@app.post("/chatbot", response_model=ChatResponse)
def chatbot(req: ChatRequest, relay: ResponseRelay = Depends(get_relay)):
    # Sync handler: runs in the threadpool, one blocking upstream call each
    start = perf_counter()
    upstream_req = build_upstream_request(
        req,
        model=settings.LLM_MODEL,
        max_tokens=settings.LLM_MAX_TOKENS,
        temperature=settings.LLM_TEMPERATURE,
    )
    result = relay.call(upstream_req)
    answer = render_answer(result)
    latency_ms = int((perf_counter() - start) * 1000)

    # Upstream failures are reported in the answer text, always with 200
    UPSTREAM_OUTCOMES.labels(outcome=result.outcome).inc()
    HTTP_REQUESTS.labels(path="/chatbot", method="POST", status="200").inc()
    HTTP_LATENCY.observe(latency_ms)
    logger.info("chatbot_ok", with_request_id({
        "outcome": result.outcome,
        "latency_ms": latency_ms,
        "model": upstream_req.model,
        "est_input_tokens": sum(estimate_input_tokens(m.content) for m in upstream_req.messages),
    }))
    return ChatResponse(chat_response=answer)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
