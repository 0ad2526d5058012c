"""
Fan token portfolio aggregation across a user's addresses.
"""
import logging
from typing import List, Optional

from app.clients.airstack import AirstackClient
from app.clients.moxie import MoxieClient
from app.models.token_models import TokenHolding
from app.utils.formatters import to_decimal

# Set up logging
logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 1000


async def resolve_owner_addresses(airstack: AirstackClient, moxie: MoxieClient, fid: str) -> List[str]:
    """
    Build the set of addresses whose holdings count as the user's.

    That is the custody and verified addresses from Airstack plus the
    vesting contract whose beneficiary is one of them, if any.
    """
    user_addresses = await airstack.get_farcaster_addresses(fid)
    logger.info(f"User addresses for FID {fid}: {user_addresses}")

    addresses = list(user_addresses)
    vesting_address = await moxie.get_vesting_contract_address(user_addresses)
    logger.info(f"Vesting contract address for FID {fid}: {vesting_address}")
    if vesting_address:
        addresses.append(vesting_address)
    return addresses


async def fetch_owned_fan_tokens(
    moxie: MoxieClient,
    addresses: List[str],
    page_size: int = DEFAULT_PAGE_SIZE,
) -> Optional[List[TokenHolding]]:
    """
    Fetch every holding owned by `addresses`, sorted by balance descending.

    Pages through the subgraph until an empty or short page. Any upstream
    error aborts the whole fetch; no partial list is returned.

    Returns:
        The holdings, or None when the addresses hold nothing.
    """
    if not addresses:
        raise ValueError("At least one owner address is required")

    # The subgraph stores addresses lower-cased
    owners = list(dict.fromkeys(address.lower() for address in addresses))

    holdings: List[TokenHolding] = []
    skip = 0
    while True:
        page = await moxie.get_portfolio_page(owners, first=page_size, skip=skip)
        logger.info(f"Fetched {len(page)} holdings (skip={skip}) for {len(owners)} addresses")
        if not page:
            break
        holdings.extend(page)
        if len(page) < page_size:
            break
        skip += page_size

    if not holdings:
        logger.info(f"No fan tokens found for addresses: {', '.join(owners)}")
        return None

    holdings.sort(key=lambda holding: to_decimal(holding.balance), reverse=True)
    return holdings
