"""
Landing frame.
"""
from fastapi import APIRouter

from app.models.frame_models import FrameCard, FrameResponse
from app.utils.frames import button, text_boxes

# Create router
router = APIRouter()


@router.api_route(
    "/",
    methods=["GET", "POST"],
    summary="Landing frame",
    response_model=FrameResponse,
)
async def home_frame() -> dict:
    """Entry frame with a single button into the fan token view."""
    response = FrameResponse(
        card=FrameCard(
            title="Farcaster Fan Token Tracker",
            subtitle="Fan token price, holders and the fan tokens you own",
            text_boxes=text_boxes(
                ("Fan Token Information", "Price, powerboost and holders"),
                ("Vesting Contract", "Locked tokens count towards your portfolio"),
            ),
        ),
        buttons=[
            button("Your Fan Token", "/yourfantoken"),
        ],
    )
    return response.model_dump()
