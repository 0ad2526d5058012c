# /app/config.py
"""
Configuration settings for the application.
Loads environment variables once at startup into a Settings object that is
handed to every client and handler.
"""
import os
import logging
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from app.models.frame_models import FrameVariant

logger = logging.getLogger(__name__)

AIRSTACK_API_URL = "https://api.airstack.xyz/gql"
MOXIE_API_URL = "https://api.studio.thegraph.com/query/23537/moxie_protocol_stats_mainnet/version/latest"
MOXIE_VESTING_API_URL = "https://api.studio.thegraph.com/query/23537/moxie_vesting_mainnet/version/latest"
DUNE_API_URL = "https://api.dune.com/api/v1"
PUBLIC_BASE_URL = "https://fantokens-kappa.vercel.app"

TOKEN_BACKGROUND = "https://bafybeidk74qchajtzcnpnjfjo6ku3yryxkn6usjh2jpsrut7lgom6g5n2m.ipfs.w3s.link/Untitled%20543%201.png"
OWNED_BACKGROUND = "https://bafybeiata3diat4mmcnz54vbqfrs5hqrbankpp5ynvhbtglrxakj55hx6y.ipfs.w3s.link/Frame%2064%20(8).png"

# Route variants: same handler, different presentation
PROFILE_VIEW = FrameVariant(title="{name}'s Profile", interactive=True)
SHARED_PROFILE_VIEW = FrameVariant(title="{name}'s Profile", interactive=False)
FAN_TOKEN_VIEW = FrameVariant(title="My Fan Token", background_image=TOKEN_BACKGROUND, interactive=True)
SHARED_FAN_TOKEN_VIEW = FrameVariant(title="{name}'s Fan Token", background_image=TOKEN_BACKGROUND, interactive=False)
OWNED_TOKENS_VIEW = FrameVariant(title="{name}", background_image=OWNED_BACKGROUND, interactive=True)
SHARED_OWNED_TOKENS_VIEW = FrameVariant(title="{name}", background_image=OWNED_BACKGROUND, interactive=False)


class Settings(BaseModel):
    """Runtime settings, built once per process by load_settings()."""
    airstack_api_key: str = Field("", description="Airstack API key")
    dune_api_key: str = Field("", description="Dune API key for analytics queries")
    analytics_query_id: Optional[int] = Field(None, description="Pre-registered Dune query shown on the token view")
    analytics_fid_field: str = Field("fid", description="Column holding the FID in analytics rows")
    airstack_api_url: str = AIRSTACK_API_URL
    moxie_api_url: str = MOXIE_API_URL
    moxie_vesting_api_url: str = MOXIE_VESTING_API_URL
    dune_api_url: str = DUNE_API_URL
    public_base_url: str = PUBLIC_BASE_URL
    http_timeout: float = 10.0
    portfolio_page_size: int = Field(1000, gt=0)
    log_level: str = "INFO"


def _optional_int(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring non-numeric ANALYTICS_QUERY_ID: {value}")
        return None


def load_settings() -> Settings:
    """Read the environment (and .env) into a Settings object."""
    load_dotenv(override=True)

    settings = Settings(
        airstack_api_key=os.getenv("AIRSTACK_API_KEY", ""),
        dune_api_key=os.getenv("DUNE_API_KEY", ""),
        analytics_query_id=_optional_int(os.getenv("ANALYTICS_QUERY_ID")),
        analytics_fid_field=os.getenv("ANALYTICS_FID_FIELD", "fid"),
        airstack_api_url=os.getenv("AIRSTACK_API_URL", AIRSTACK_API_URL),
        moxie_api_url=os.getenv("MOXIE_API_URL", MOXIE_API_URL),
        moxie_vesting_api_url=os.getenv("MOXIE_VESTING_API_URL", MOXIE_VESTING_API_URL),
        dune_api_url=os.getenv("DUNE_API_URL", DUNE_API_URL),
        public_base_url=os.getenv("PUBLIC_BASE_URL", PUBLIC_BASE_URL).rstrip("/"),
        http_timeout=float(os.getenv("HTTP_TIMEOUT", "10.0")),
        portfolio_page_size=int(os.getenv("PORTFOLIO_PAGE_SIZE", "1000")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )

    if not settings.airstack_api_key:
        logger.warning("AIRSTACK_API_KEY is not set in the environment variables")
    if settings.analytics_query_id is not None and not settings.dune_api_key:
        logger.warning("ANALYTICS_QUERY_ID is set but DUNE_API_KEY is missing - analytics disabled")

    return settings
