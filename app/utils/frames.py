"""
Builders for frame responses shared by all routes.
"""
import time
from typing import List, Optional
from urllib.parse import quote, urlencode

from app.models.frame_models import FrameButton, FrameCard, FrameResponse, FrameVariant, TextBox

WARPCAST_COMPOSE_URL = "https://warpcast.com/~/compose"
PLACEHOLDER_IMAGE = "/api/placeholder/150/150"


def button(label: str, target: str, value: Optional[str] = None) -> FrameButton:
    return FrameButton(label=label, action="post", target=target, value=value)


def link_button(label: str, href: str) -> FrameButton:
    return FrameButton(label=label, action="link", target=href)


def cursor_button(label: str, target: str, cursor: int) -> FrameButton:
    """Post button that carries a pagination cursor in its target."""
    return FrameButton(
        label=label,
        action="post",
        target=f"{target}?{urlencode({'cursor': cursor})}",
        value=str(cursor),
    )


def message_frame(message: str, buttons: List[FrameButton]) -> FrameResponse:
    """A plain text card, used for errors and empty states."""
    return FrameResponse(card=FrameCard(title=message), buttons=buttons)


def missing_fid_frame() -> FrameResponse:
    return message_frame("Error: No FID", [button("Back", "/")])


def error_frame(what: str = "fan token") -> FrameResponse:
    return message_frame(f"Error fetching {what} data. Please try again.", [button("Home", "/")])


def render_title(variant: FrameVariant, name: Optional[str]) -> str:
    return variant.title.format(name=name or "Unknown")


def text_boxes(*pairs) -> List[TextBox]:
    return [TextBox(label=label, value=value) for label, value in pairs]


def share_frame_url(base_url: str, path: str, **params) -> str:
    """URL of a shared frame; a timestamp keeps clients from reusing a cached image."""
    params["timestamp"] = int(time.time() * 1000)
    return f"{base_url}/api/{path}?{urlencode(params)}"


def compose_share_url(text: str, embed_url: str) -> str:
    """Warpcast compose link that pre-fills a cast with the frame embedded."""
    return f"{WARPCAST_COMPOSE_URL}?text={quote(text, safe='')}&embeds[]={quote(embed_url, safe='')}"


def action_fid(payload) -> Optional[str]:
    """FID of the clicking user from a frame action body, as a string."""
    if payload is None or payload.untrustedData.fid is None:
        return None
    return str(payload.untrustedData.fid)
