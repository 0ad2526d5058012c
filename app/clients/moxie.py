"""
Moxie subgraph queries: fan tokens, vesting contracts and portfolios.
"""
import logging
from typing import List, Optional

from app.clients.graphql import GraphQLClient
from app.models.token_models import (
    FanTokenAddress, SubjectToken, TokenHolding, TokenLockWallet
)

# Set up logging
logger = logging.getLogger(__name__)

FAN_TOKEN_ADDRESS_QUERY = """
query GetFanTokenAddress($symbol_starts_with: String) {
  subjectTokens(where: { symbol_starts_with: $symbol_starts_with }) {
    address: id
    name
    symbol
    decimals
  }
}
"""

FAN_TOKEN_INFO_QUERY = """
query GetFanTokenInfo($fanTokenAddress: ID) {
  subjectTokens(where: { id: $fanTokenAddress }) {
    currentPriceInMoxie
    id
    name
    symbol
    portfolio {
      balance
      user {
        id
      }
    }
  }
}
"""

VESTING_CONTRACT_QUERY = """
query GetVestingContract($beneficiaries: [Bytes!]) {
  tokenLockWallets(where: { beneficiary_in: $beneficiaries }) {
    address: id
    beneficiary
  }
}
"""

PORTFOLIO_PAGE_QUERY = """
query GetPortfolioPage($userAddresses: [String!], $first: Int!, $skip: Int!) {
  portfolios(
    first: $first
    skip: $skip
    orderBy: balance
    orderDirection: desc
    where: { user_in: $userAddresses }
  ) {
    balance
    buyVolume
    sellVolume
    subjectToken {
      name
      symbol
      currentPriceInMoxie
      decimals
    }
  }
}
"""


class MoxieClient:
    """Queries against the Moxie protocol and vesting subgraphs."""

    def __init__(self, protocol: GraphQLClient, vesting: GraphQLClient):
        self.protocol = protocol
        self.vesting = vesting

    async def get_fan_token_address(self, fid: str) -> Optional[FanTokenAddress]:
        """Find the fan token whose symbol is 'fid:<fid>'."""
        data = await self.protocol.execute(
            FAN_TOKEN_ADDRESS_QUERY, {"symbol_starts_with": f"fid:{fid}"}
        )
        tokens = data.get("subjectTokens") or []
        # symbol_starts_with also matches fid:12 for fid:1, so prefer the exact symbol
        exact = [t for t in tokens if t.get("symbol") == f"fid:{fid}"]
        if not exact:
            logger.info(f"No fan token found for FID: {fid}")
            return None
        return FanTokenAddress(**exact[0])

    async def get_fan_token_info(self, fid: str) -> Optional[SubjectToken]:
        """
        Get price and holder list of a user's fan token.

        Returns None when the FID has no fan token.
        """
        token_address = await self.get_fan_token_address(fid)
        if token_address is None:
            return None

        data = await self.protocol.execute(
            FAN_TOKEN_INFO_QUERY, {"fanTokenAddress": token_address.address.lower()}
        )
        tokens = data.get("subjectTokens") or []
        if not tokens:
            logger.info(f"No fan token information found for address: {token_address.address}")
            return None
        return SubjectToken(**tokens[0])

    async def get_vesting_contract_address(self, beneficiaries: List[str]) -> Optional[str]:
        if not beneficiaries:
            return None

        data = await self.vesting.execute(
            VESTING_CONTRACT_QUERY,
            {"beneficiaries": [address.lower() for address in beneficiaries]},
        )
        wallets = [TokenLockWallet(**w) for w in data.get("tokenLockWallets") or []]
        if not wallets:
            logger.info(f"No vesting contract found for addresses: {', '.join(beneficiaries)}")
            return None
        return wallets[0].address

    async def get_portfolio_page(self, addresses: List[str], first: int, skip: int) -> List[TokenHolding]:
        """Fetch one page of holdings owned by any of `addresses`, largest balance first."""
        data = await self.protocol.execute(
            PORTFOLIO_PAGE_QUERY,
            {"userAddresses": addresses, "first": first, "skip": skip},
        )
        return [TokenHolding(**holding) for holding in data.get("portfolios") or []]
