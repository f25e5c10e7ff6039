"""Assistant chat endpoint."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ecopulse.assistant.service import DEFAULT_CONTEXT, ask_assistant
from ecopulse.auth.dependencies import get_current_user_id

router = APIRouter(prefix="/api/v1/assistant", tags=["Assistant"])


class ChatRequest(BaseModel):
    message: str = Field(min_length=1, max_length=2000)
    context: str = DEFAULT_CONTEXT


class ChatResponse(BaseModel):
    response: str


@router.post("/chat", response_model=ChatResponse)
async def chat(
    body: ChatRequest,
    _user_id: str = Depends(get_current_user_id),
) -> ChatResponse:
    """Relay a question to the environmental assistant."""
    return ChatResponse(response=await ask_assistant(body.message, body.context))
