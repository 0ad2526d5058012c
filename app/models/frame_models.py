"""
Pydantic models for frame requests and responses.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Literal


class FrameActionData(BaseModel):
    """Untrusted part of a Farcaster frame action payload."""
    fid: Optional[int] = Field(None, description="FID of the user who clicked")
    buttonIndex: Optional[int] = Field(None, description="1-based index of the clicked button")
    url: Optional[str] = None
    inputText: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class FrameActionRequest(BaseModel):
    """Request body posted by a client when a frame button is clicked."""
    untrustedData: FrameActionData = Field(default_factory=FrameActionData)
    trustedData: Optional[dict] = None

    model_config = ConfigDict(extra="allow")


class TextBox(BaseModel):
    """A labelled value shown on the card."""
    label: str
    value: str


class FrameCard(BaseModel):
    """Structured image content for a frame."""
    title: str = Field(..., description="Heading shown on the card")
    image_url: Optional[str] = Field(None, description="Profile or token image")
    badge: Optional[str] = Field(None, description="Text shown in place of an image, e.g. 'Channel'")
    background_image: Optional[str] = None
    position: Optional[str] = Field(None, description="Pagination marker such as '2 of 10'")
    subtitle: Optional[str] = None
    text_boxes: List[TextBox] = Field(default_factory=list)


class FrameButton(BaseModel):
    """Action button under the frame image."""
    label: str
    action: Literal["post", "link"] = "post"
    target: str = Field(..., description="Route to post to, or URL for link buttons")
    value: Optional[str] = Field(None, description="Opaque cursor echoed back on click")


class FrameResponse(BaseModel):
    """Response model for every frame route."""
    card: FrameCard
    buttons: List[FrameButton] = Field(default_factory=list, max_length=4)


class FrameVariant(BaseModel):
    """Presentation options shared by the interactive and shared version of a view."""
    title: str = Field(..., description="Title template, '{name}' is replaced by the subject name")
    background_image: Optional[str] = None
    interactive: bool = True
