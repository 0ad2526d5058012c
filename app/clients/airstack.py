"""
Airstack social-graph queries: profiles, powerboost and linked addresses.
"""
import logging
from typing import List, Optional

from app.clients.errors import ProfileNotFoundError
from app.clients.graphql import GraphQLClient
from app.models.farcaster_models import FarcasterSocial, PrimaryDomain, ProfileInfo

# Set up logging
logger = logging.getLogger(__name__)

PROFILE_QUERY = """
query GetProfileInfo($identity: Identity!) {
  Wallet(input: { identity: $identity }) {
    primaryDomain {
      name
      avatar
    }
  }
  farcasterSocials: Socials(
    input: {
      filter: { identity: { _eq: $identity }, dappName: { _eq: farcaster } }
      blockchain: ethereum
      order: { followerCount: DESC }
    }
  ) {
    Social {
      profileName
      profileDisplayName
      profileHandle
      profileImage
      profileBio
      followerCount
      followingCount
      farcasterScore {
        farScore
      }
    }
  }
}
"""

POWERBOOST_QUERY = """
query GetPowerboost($userId: String!) {
  Socials(
    input: {
      filter: { dappName: { _eq: farcaster }, userId: { _eq: $userId } }
      blockchain: ethereum
    }
  ) {
    Social {
      farcasterScore {
        powerBoost
      }
    }
  }
}
"""

ADDRESSES_QUERY = """
query GetFarcasterAddresses($identity: Identity!) {
  Socials(
    input: {
      filter: { dappName: { _eq: farcaster }, identity: { _eq: $identity } }
      blockchain: ethereum
    }
  ) {
    Social {
      userAddress
      userAssociatedAddresses
    }
  }
}
"""


def _socials(block: Optional[dict]) -> List[dict]:
    if not block:
        return []
    return block.get("Social") or []


class AirstackClient:
    """Queries against the Airstack GraphQL API."""

    def __init__(self, graphql: GraphQLClient):
        self.graphql = graphql

    async def get_profile_info(self, fid: str) -> Optional[ProfileInfo]:
        """
        Get the Farcaster profile and primary ENS domain for a FID.

        Returns None when Airstack has no Farcaster social for the FID.
        """
        data = await self.graphql.execute(PROFILE_QUERY, {"identity": f"fc_fid:{fid}"})
        socials = _socials(data.get("farcasterSocials"))
        if not socials:
            logger.info(f"No Farcaster profile found for FID: {fid}")
            return None

        wallet = data.get("Wallet") or {}
        domain = wallet.get("primaryDomain")
        return ProfileInfo(
            farcasterSocial=FarcasterSocial(**socials[0]),
            primaryDomain=PrimaryDomain(**domain) if domain else None,
        )

    async def get_powerboost_score(self, fid: str) -> Optional[float]:
        data = await self.graphql.execute(POWERBOOST_QUERY, {"userId": str(fid)})
        socials = _socials(data.get("Socials"))
        if not socials:
            logger.info(f"No powerboost score found for FID: {fid}")
            return None
        score = socials[0].get("farcasterScore") or {}
        return score.get("powerBoost")

    async def get_farcaster_addresses(self, fid: str) -> List[str]:
        """
        Get the custody address plus verified addresses for a FID.

        Raises:
            ProfileNotFoundError: when the FID has no Farcaster social.
        """
        data = await self.graphql.execute(ADDRESSES_QUERY, {"identity": f"fc_fid:{fid}"})
        socials = _socials(data.get("Socials"))
        if not socials:
            raise ProfileNotFoundError(f"No Farcaster profile found for FID: {fid}")

        social = FarcasterSocial(**socials[0])
        addresses = [social.userAddress] if social.userAddress else []
        addresses.extend(social.userAssociatedAddresses or [])
        # dict.fromkeys keeps first-seen order
        return list(dict.fromkeys(addresses))
