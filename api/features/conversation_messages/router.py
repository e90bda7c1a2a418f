"""Router for the Conversation Messages feature."""
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Query, status

from api.features.conversation_messages.controller import ConversationMessageController
from api.features.conversation_messages.dtos import (
    AssistantMessageRequest,
    MessageCreatedDTO,
    MessagesResponse,
    UserMessageRequest,
)
from api.shared.dtos import HealthCheckResponse
from api.shared.response import ResponseModel
from di.container import ApplicationContainer as DependencyContainer

router = APIRouter()


@router.get("/health", response_model=ResponseModel[HealthCheckResponse])
async def health_check():
    return ResponseModel.success(
        data=HealthCheckResponse(status="healthy", dependencies={"database": "ok"}),
        message="Conversation messages service is healthy",
    )


@router.get(
    "/{conversation_id}/messages", response_model=ResponseModel[MessagesResponse]
)
@inject
async def get_messages(
    conversation_id: int,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    controller: ConversationMessageController = Depends(
        Provide[DependencyContainer.controllers.conversation_message_controller]
    ),
):
    result = await controller.get_messages(
        conversation_id=conversation_id, limit=limit, offset=offset
    )
    return ResponseModel.success(data=result, message="Messages fetched")


@router.get(
    "/{conversation_id}/messages/latest",
    response_model=ResponseModel[MessagesResponse],
)
@inject
async def get_latest_messages(
    conversation_id: int,
    limit: int = Query(10, ge=1, le=200),
    controller: ConversationMessageController = Depends(
        Provide[DependencyContainer.controllers.conversation_message_controller]
    ),
):
    result = await controller.get_latest_messages(
        conversation_id=conversation_id, limit=limit
    )
    return ResponseModel.success(data=result, message="Latest messages fetched")


@router.post(
    "/{conversation_id}/messages/user",
    response_model=ResponseModel[MessageCreatedDTO],
    status_code=status.HTTP_201_CREATED,
)
@inject
async def append_user_message(
    conversation_id: int,
    request: UserMessageRequest,
    controller: ConversationMessageController = Depends(
        Provide[DependencyContainer.controllers.conversation_message_controller]
    ),
):
    created = await controller.append_user_message(
        conversation_id=conversation_id, request=request
    )
    return ResponseModel.success(data=created, message="User message stored")


@router.post(
    "/{conversation_id}/messages/assistant",
    response_model=ResponseModel[MessageCreatedDTO],
    status_code=status.HTTP_201_CREATED,
)
@inject
async def append_assistant_message(
    conversation_id: int,
    request: AssistantMessageRequest,
    controller: ConversationMessageController = Depends(
        Provide[DependencyContainer.controllers.conversation_message_controller]
    ),
):
    created = await controller.append_assistant_message(
        conversation_id=conversation_id, request=request
    )
    return ResponseModel.success(data=created, message="Assistant message stored")
