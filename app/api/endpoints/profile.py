"""
Profile frames - Farcaster social profile of a user.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query

from app.api.deps import get_airstack_client, get_settings
from app.clients.airstack import AirstackClient
from app.clients.errors import UpstreamError
from app.config import PROFILE_VIEW, SHARED_PROFILE_VIEW, Settings
from app.models.frame_models import FrameActionRequest, FrameCard, FrameResponse, FrameVariant
from app.utils.formatters import format_count, format_number
from app.utils.frames import (
    PLACEHOLDER_IMAGE, action_fid, button, compose_share_url, error_frame,
    link_button, message_frame, missing_fid_frame, render_title,
    share_frame_url, text_boxes
)

# Set up logging
logger = logging.getLogger(__name__)

# Create router
router = APIRouter()


async def build_profile_frame(
    fid: str,
    variant: FrameVariant,
    airstack: AirstackClient,
    settings: Settings,
) -> FrameResponse:
    """Profile card for `fid`, shared by the interactive and shared routes."""
    try:
        profile = await airstack.get_profile_info(fid)
    except UpstreamError as e:
        logger.error(f"Error fetching profile for FID {fid}: {str(e)}")
        return error_frame("profile")

    if profile is None:
        logger.warning(f"No Farcaster profile found for FID {fid}")
        return message_frame(f"No Farcaster profile found for FID {fid}", [button("Back", "/")])

    social = profile.farcasterSocial
    card = FrameCard(
        title=render_title(variant, profile.display_name),
        image_url=social.profileImage or PLACEHOLDER_IMAGE,
        background_image=variant.background_image,
        subtitle=social.profileBio,
        text_boxes=text_boxes(
            ("Followers", format_count(social.followerCount)),
            ("Following", format_count(social.followingCount)),
            ("FarScore", format_number(profile.far_score)),
            ("Primary Domain", profile.primaryDomain.name if profile.primaryDomain else "N/A"),
        ),
    )

    if not variant.interactive:
        return FrameResponse(card=card, buttons=[button("Check Your Profile", "/profile")])

    share_url = share_frame_url(settings.public_base_url, "share-profile", fid=fid)
    return FrameResponse(
        card=card,
        buttons=[
            button("Back", "/"),
            button("Refresh", "/profile"),
            button("Fan Token", "/yourfantoken"),
            link_button("Share", compose_share_url("Check out my Farcaster profile!", share_url)),
        ],
    )


@router.post(
    "/profile",
    summary="Profile frame for the clicking user",
    response_model=FrameResponse,
)
async def profile_frame(
    payload: Optional[FrameActionRequest] = None,
    airstack: AirstackClient = Depends(get_airstack_client),
    settings: Settings = Depends(get_settings),
) -> dict:
    fid = action_fid(payload)
    logger.info(f"Entering /profile frame for FID: {fid}")
    if not fid:
        logger.error("No FID found in frame action")
        return missing_fid_frame().model_dump()

    response = await build_profile_frame(fid, PROFILE_VIEW, airstack, settings)
    return response.model_dump()


@router.get(
    "/share-profile",
    summary="Shareable profile frame",
    response_model=FrameResponse,
)
async def share_profile_frame(
    fid: Optional[int] = Query(None, description="Farcaster ID of the shared profile"),
    airstack: AirstackClient = Depends(get_airstack_client),
    settings: Settings = Depends(get_settings),
) -> dict:
    logger.info(f"Entering /share-profile frame for FID: {fid}")
    if fid is None:
        return missing_fid_frame().model_dump()

    response = await build_profile_frame(str(fid), SHARED_PROFILE_VIEW, airstack, settings)
    return response.model_dump()
