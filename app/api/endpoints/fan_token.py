"""
Fan token frames - price, powerboost and holder count of a user's fan token.
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from app.api.deps import get_airstack_client, get_dune_client, get_moxie_client, get_settings
from app.clients.airstack import AirstackClient
from app.clients.dune import DuneClient, filter_rows_by_fid
from app.clients.errors import UpstreamError
from app.clients.moxie import MoxieClient
from app.config import FAN_TOKEN_VIEW, SHARED_FAN_TOKEN_VIEW, Settings
from app.models.frame_models import FrameActionRequest, FrameCard, FrameResponse, FrameVariant, TextBox
from app.utils.formatters import format_number
from app.utils.frames import (
    PLACEHOLDER_IMAGE, action_fid, button, compose_share_url, error_frame,
    link_button, message_frame, missing_fid_frame, render_title,
    share_frame_url, text_boxes
)

# Set up logging
logger = logging.getLogger(__name__)

# Create router
router = APIRouter()

MAX_ANALYTICS_FIELDS = 2


async def get_powerboost(airstack: AirstackClient, fid: str) -> Optional[float]:
    try:
        return await airstack.get_powerboost_score(fid)
    except UpstreamError as e:
        logger.warning(f"Powerboost lookup failed for FID {fid}: {str(e)}")
        return None


async def get_analytics_boxes(dune: Optional[DuneClient], settings: Settings, fid: str) -> List[TextBox]:
    """Extra text boxes from the configured analytics query, empty when unavailable."""
    if dune is None:
        return []
    try:
        rows = await dune.get_query_rows(settings.analytics_query_id)
    except UpstreamError as e:
        logger.warning(f"Analytics lookup failed for FID {fid}: {str(e)}")
        return []

    matches = filter_rows_by_fid(rows, fid, settings.analytics_fid_field)
    if not matches:
        logger.info(f"No analytics row for FID {fid}")
        return []

    row = matches[0]
    fields = [key for key in row if key != settings.analytics_fid_field][:MAX_ANALYTICS_FIELDS]
    return text_boxes(*[(key.replace("_", " ").title(), format_number(row[key])) for key in fields])


async def build_fan_token_frame(
    fid: str,
    variant: FrameVariant,
    airstack: AirstackClient,
    moxie: MoxieClient,
    dune: Optional[DuneClient],
    settings: Settings,
) -> FrameResponse:
    """Fan token card for `fid`, shared by the interactive and shared routes."""
    try:
        token = await moxie.get_fan_token_info(fid)
        profile = await airstack.get_profile_info(fid)
    except UpstreamError as e:
        logger.error(f"Error fetching fan token data for FID {fid}: {str(e)}")
        return error_frame("fan token")

    if token is None:
        logger.warning(f"No fan token found for FID {fid}")
        return message_frame(f"No fan token found for FID {fid}", [button("Back", "/")])

    powerboost = await get_powerboost(airstack, fid)
    current_price = format_number(token.currentPriceInMoxie)
    holders = str(token.holder_count)
    logger.info(f"Formatted data: price={current_price}, holders={holders}, powerboost={powerboost}")

    boxes = text_boxes(
        ("Current Price", f"{current_price} MOXIE" if current_price != "N/A" else current_price),
        ("Powerboost", f"{powerboost:.2f}" if powerboost is not None else "N/A"),
        ("Holders", holders),
    )
    boxes.extend(await get_analytics_boxes(dune, settings, fid))

    social = profile.farcasterSocial if profile else None
    card = FrameCard(
        title=render_title(variant, profile.display_name if profile else None),
        image_url=(social.profileImage if social else None) or PLACEHOLDER_IMAGE,
        background_image=variant.background_image,
        text_boxes=boxes,
    )

    if not variant.interactive:
        return FrameResponse(card=card, buttons=[button("Check Your Fan Token", "/yourfantoken")])

    share_url = share_frame_url(settings.public_base_url, "share", fid=fid)
    share_text = "Check out my Fan Token stats! Check your own stats here"
    logger.info(f"Share URL: {share_url}")
    return FrameResponse(
        card=card,
        buttons=[
            button("Back", "/"),
            button("Refresh", "/yourfantoken"),
            button("Owned", "/owned-tokens"),
            link_button("Share", compose_share_url(share_text, share_url)),
        ],
    )


@router.post(
    "/yourfantoken",
    summary="Fan token frame for the clicking user",
    response_model=FrameResponse,
)
async def your_fan_token_frame(
    payload: Optional[FrameActionRequest] = None,
    airstack: AirstackClient = Depends(get_airstack_client),
    moxie: MoxieClient = Depends(get_moxie_client),
    dune: Optional[DuneClient] = Depends(get_dune_client),
    settings: Settings = Depends(get_settings),
) -> dict:
    fid = action_fid(payload)
    logger.info(f"Entering /yourfantoken frame for FID: {fid}")
    if not fid:
        logger.error("No FID found in frame action")
        return missing_fid_frame().model_dump()

    response = await build_fan_token_frame(fid, FAN_TOKEN_VIEW, airstack, moxie, dune, settings)
    return response.model_dump()


@router.get(
    "/share",
    summary="Shareable fan token frame",
    response_model=FrameResponse,
)
async def share_fan_token_frame(
    fid: Optional[int] = Query(None, description="Farcaster ID of the fan token owner"),
    timestamp: Optional[int] = Query(None, description="Cache buster set by the share link"),
    airstack: AirstackClient = Depends(get_airstack_client),
    moxie: MoxieClient = Depends(get_moxie_client),
    dune: Optional[DuneClient] = Depends(get_dune_client),
    settings: Settings = Depends(get_settings),
) -> dict:
    logger.info(f"Entering /share frame - FID: {fid}, Timestamp: {timestamp}")
    if fid is None:
        return missing_fid_frame().model_dump()

    response = await build_fan_token_frame(str(fid), SHARED_FAN_TOKEN_VIEW, airstack, moxie, dune, settings)
    return response.model_dump()
