"""
Owned fan token frames - page through the fan tokens a user holds.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query

from app.api.deps import get_airstack_client, get_moxie_client, get_settings
from app.clients.airstack import AirstackClient
from app.clients.errors import UpstreamError
from app.clients.moxie import MoxieClient
from app.config import OWNED_TOKENS_VIEW, SHARED_OWNED_TOKENS_VIEW, Settings
from app.models.frame_models import FrameActionRequest, FrameCard, FrameResponse, FrameVariant
from app.services.portfolio import fetch_owned_fan_tokens, resolve_owner_addresses
from app.utils.formatters import extract_token_fid, format_balance, format_number, token_owner_name
from app.utils.frames import (
    action_fid, button, compose_share_url, cursor_button, error_frame,
    link_button, message_frame, missing_fid_frame, render_title,
    share_frame_url, text_boxes
)

# Set up logging
logger = logging.getLogger(__name__)

# Create router
router = APIRouter()

DEFAULT_DECIMALS = 18


async def build_owned_token_frame(
    fid: str,
    cursor: int,
    variant: FrameVariant,
    airstack: AirstackClient,
    moxie: MoxieClient,
    settings: Settings,
) -> FrameResponse:
    """Card for the holding at `cursor` in the user's balance-sorted portfolio."""
    cursor = max(0, cursor)
    try:
        addresses = await resolve_owner_addresses(airstack, moxie, fid)
        holdings = await fetch_owned_fan_tokens(moxie, addresses, settings.portfolio_page_size)
    except UpstreamError as e:
        logger.error(f"Error fetching owned fan tokens for FID {fid}: {str(e)}")
        return error_frame("fan token")

    if not holdings:
        logger.warning(f"No fan tokens found for FID {fid}")
        return message_frame(f"No fan tokens found for FID {fid}", [button("Back", "/")])

    total = len(holdings)
    if cursor >= total:
        logger.warning(f"Token index {cursor} out of range ({total} tokens) for FID {fid}")
        return message_frame("No fan token found for this index", [button("Home", "/")])

    logger.info(f"Selecting token at index {cursor} out of {total} tokens")
    holding = holdings[cursor]

    profile = None
    token_fid = extract_token_fid(holding.subjectToken.symbol)
    if token_fid:
        try:
            profile = await airstack.get_profile_info(token_fid)
        except UpstreamError as e:
            logger.warning(f"Error fetching profile for token FID {token_fid}: {str(e)}")

    decimals = holding.subjectToken.decimals
    balance = format_balance(holding.balance, DEFAULT_DECIMALS if decimals is None else decimals)
    buy_volume = format_balance(holding.buyVolume)
    current_price = format_number(holding.subjectToken.currentPriceInMoxie)
    owner_name = token_owner_name(holding, profile)
    logger.info(f"Formatted data: balance={balance}, owner={owner_name}, buy_volume={buy_volume}, price={current_price}")

    image_url = profile.farcasterSocial.profileImage if profile else None
    card = FrameCard(
        title=render_title(variant, owner_name),
        image_url=image_url,
        badge=None if image_url else "Channel",
        background_image=variant.background_image,
        position=f"{cursor + 1} of {total}" if variant.interactive else None,
        text_boxes=text_boxes(
            ("Balance", f"{balance} tokens"),
            ("Buy Volume", f"{buy_volume} MOXIE"),
            ("Current Price", f"{current_price} MOXIE" if current_price != "N/A" else current_price),
        ),
    )

    if not variant.interactive:
        return FrameResponse(card=card, buttons=[button("Check Your Owned Tokens", "/owned-tokens")])

    share_text = (
        f"I am the proud owner of {balance} of {owner_name}'s Fan Tokens powered by @moxie.eth. "
        f"Check which Fan Tokens you own"
    )
    share_url = share_frame_url(settings.public_base_url, "share-owned", fid=fid, tokenIndex=cursor)
    logger.info(f"Share URL: {share_url}")

    buttons = [button("Home", "/")]
    if cursor < total - 1:
        buttons.append(cursor_button("Next", "/owned-tokens", cursor + 1))
    if cursor > 0:
        buttons.append(cursor_button("Previous", "/owned-tokens", cursor - 1))
    buttons.append(link_button("Share", compose_share_url(share_text, share_url)))
    return FrameResponse(card=card, buttons=buttons)


@router.post(
    "/owned-tokens",
    summary="Owned fan tokens frame for the clicking user",
    response_model=FrameResponse,
)
async def owned_tokens_frame(
    payload: Optional[FrameActionRequest] = None,
    cursor: int = Query(0, description="Index of the holding to show"),
    airstack: AirstackClient = Depends(get_airstack_client),
    moxie: MoxieClient = Depends(get_moxie_client),
    settings: Settings = Depends(get_settings),
) -> dict:
    fid = action_fid(payload)
    logger.info(f"Entering /owned-tokens frame - FID: {fid}, Current Index: {cursor}")
    if not fid:
        logger.error("No FID found in frame action")
        return missing_fid_frame().model_dump()

    response = await build_owned_token_frame(fid, cursor, OWNED_TOKENS_VIEW, airstack, moxie, settings)
    return response.model_dump()


@router.get(
    "/share-owned",
    summary="Shareable owned fan token frame",
    response_model=FrameResponse,
)
async def share_owned_token_frame(
    fid: Optional[int] = Query(None, description="Farcaster ID of the token holder"),
    tokenIndex: int = Query(0, description="Index of the shared holding"),
    timestamp: Optional[int] = Query(None, description="Cache buster set by the share link"),
    airstack: AirstackClient = Depends(get_airstack_client),
    moxie: MoxieClient = Depends(get_moxie_client),
    settings: Settings = Depends(get_settings),
) -> dict:
    logger.info(f"Entering /share-owned frame - FID: {fid}, Token Index: {tokenIndex}, Timestamp: {timestamp}")
    if fid is None:
        return missing_fid_frame().model_dump()

    response = await build_owned_token_frame(
        str(fid), tokenIndex, SHARED_OWNED_TOKENS_VIEW, airstack, moxie, settings
    )
    return response.model_dump()
