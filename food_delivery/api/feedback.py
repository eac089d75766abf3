"""Feedback endpoints. Open to anonymous visitors."""

from fastapi import APIRouter, Depends, status

from food_delivery.api.deps import get_feedback_service
from food_delivery.schemas import FeedbackCreate, FeedbackResponse, MessageResponse
from food_delivery.services.feedback import FeedbackService

router = APIRouter(tags=["Feedback"])


@router.post(
    "/feedback",
    response_model=FeedbackResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Feedback",
)
async def submit_feedback(
    payload: FeedbackCreate,
    feedback: FeedbackService = Depends(get_feedback_service),
) -> FeedbackResponse:
    record = await feedback.submit(payload)
    return FeedbackResponse.model_validate(record)


@router.get("/feedback", response_model=list[FeedbackResponse], summary="List Feedback")
async def list_feedback(
    feedback: FeedbackService = Depends(get_feedback_service),
) -> list[FeedbackResponse]:
    records = await feedback.list_all()
    return [FeedbackResponse.model_validate(r) for r in records]


@router.delete("/feedback/{feedback_id}", response_model=MessageResponse, summary="Delete Feedback")
async def delete_feedback(
    feedback_id: int,
    feedback: FeedbackService = Depends(get_feedback_service),
) -> MessageResponse:
    await feedback.delete(feedback_id)
    return MessageResponse(message="Feedback deleted")
