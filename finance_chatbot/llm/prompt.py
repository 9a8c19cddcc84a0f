import math
from finance_chatbot.schemas import ChatRequest, ChatMessage, UpstreamRequest

DEFAULT_MODEL = "gpt-4o-mini"
# Caps worst-case answer length (and therefore cost) per request
DEFAULT_MAX_TOKENS = 500
DEFAULT_TEMPERATURE = 0.7

SYSTEM_PROMPT_TEMPLATE = (
    "You are a personal finance assistant. You have access to the user's spending data: "
    "Food: ${food:.2f}, Rent: ${rent:.2f}, Entertainment: ${entertainment:.2f}. "
    "Use this information to provide personalized advice when relevant. "
    "Be conversational and helpful."
)

def build_system_prompt(query: ChatRequest) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(
        food=query.total_food,
        rent=query.total_rent,
        entertainment=query.total_entertainment,
    )

def build_upstream_request(
    query: ChatRequest,
    model: str = DEFAULT_MODEL,
    max_tokens: int = DEFAULT_MAX_TOKENS,
    temperature: float = DEFAULT_TEMPERATURE,
) -> UpstreamRequest:
    """Translate an inbound question into a chat-completion request.

    The question is forwarded verbatim as the user turn; totals are not
    range-checked.
    """
    return UpstreamRequest(
        model=model,
        messages=[
            ChatMessage(role="system", content=build_system_prompt(query)),
            ChatMessage(role="user", content=query.user_question),
        ],
        max_tokens=max_tokens,
        temperature=temperature,
    )

def estimate_input_tokens(text: str) -> int:
    # ~4 characters per token for English text
    return math.ceil(len(text or "") / 4)
