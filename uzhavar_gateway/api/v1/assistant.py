"""POST /v1/assistant - scoped help assistant"""

from fastapi import APIRouter, Depends

from uzhavar_gateway.api.v1.schemas import AssistantRequest, AssistantResponse
from uzhavar_gateway.api.dependencies import get_assistant_client
from uzhavar_gateway.infrastructure.clients.assistant import AssistantClient

router = APIRouter()


@router.post("/assistant", response_model=AssistantResponse)
async def ask_assistant(
    request_body: AssistantRequest,
    assistant_client: AssistantClient = Depends(get_assistant_client),
):
    """
    Answer a question about the system's workflows.

    Upstream failures come back as a fixed fallback reply with status 200.
    """
    reply = await assistant_client.ask(request_body.prompt)
    return AssistantResponse(reply=reply)
