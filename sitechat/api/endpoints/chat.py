from fastapi import APIRouter
from sitechat.schemas.chat import ChatRequest, ChatResponse, ErrorResponse
from sitechat.services.chat_pipeline import get_chat_answer

router = APIRouter()


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(request: ChatRequest):
    result = await get_chat_answer(request.message)
    return ChatResponse(**result)
