# /app/models/farcaster_models.py
"""
Pydantic models for Airstack social data.
"""
from pydantic import BaseModel, ConfigDict
from typing import List, Optional


class FarcasterScore(BaseModel):
    farScore: Optional[float] = None
    powerBoost: Optional[float] = None


class FarcasterSocial(BaseModel):
    """Farcaster profile fields returned by Airstack Socials."""
    profileName: Optional[str] = None
    profileDisplayName: Optional[str] = None
    profileHandle: Optional[str] = None
    profileImage: Optional[str] = None
    profileBio: Optional[str] = None
    followerCount: Optional[int] = None
    followingCount: Optional[int] = None
    farcasterScore: Optional[FarcasterScore] = None
    userAddress: Optional[str] = None
    userAssociatedAddresses: Optional[List[str]] = None

    model_config = ConfigDict(extra="allow")


class PrimaryDomain(BaseModel):
    name: str
    avatar: Optional[str] = None


class ProfileInfo(BaseModel):
    """Model for a user's combined wallet and Farcaster profile."""
    farcasterSocial: FarcasterSocial
    primaryDomain: Optional[PrimaryDomain] = None

    @property
    def display_name(self) -> Optional[str]:
        return self.farcasterSocial.profileDisplayName or self.farcasterSocial.profileName

    @property
    def far_score(self) -> Optional[float]:
        if self.farcasterSocial.farcasterScore is None:
            return None
        return self.farcasterSocial.farcasterScore.farScore
