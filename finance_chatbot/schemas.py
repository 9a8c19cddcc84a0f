from pydantic import BaseModel, Field
from typing import Any, List, Optional

class ChatRequest(BaseModel):
    user_question: str
    total_food: float
    total_rent: float
    total_entertainment: float

class ChatResponse(BaseModel):
    chat_response: str

class ChatMessage(BaseModel):
    role: str
    content: str

class UpstreamRequest(BaseModel):
    model: str
    messages: List[ChatMessage]
    max_tokens: int
    temperature: float = Field(ge=0.0, le=1.0)

# Partial view of a chat-completion response: only the fields we read.
# Unknown fields are ignored (pydantic's default extra="ignore").
class CompletionMessage(BaseModel):
    content: Optional[str] = None

class CompletionChoice(BaseModel):
    message: Optional[CompletionMessage] = None

class CompletionPayload(BaseModel):
    # Only choices[0] is decoded; later choices are never inspected
    choices: List[Any] = Field(default_factory=list)

    def first_content(self) -> str | None:
        if not self.choices:
            return None
        first = CompletionChoice.model_validate(self.choices[0])
        if first.message is None:
            return None
        return first.message.content
