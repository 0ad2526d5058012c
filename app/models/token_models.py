"""
Pydantic models for Moxie fan token data.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional


class SubjectTokenRef(BaseModel):
    """Fan token referenced from a holding."""
    name: str = Field(..., description="Token name")
    symbol: str = Field(..., description="Token symbol, 'fid:<n>' for user tokens")
    currentPriceInMoxie: Optional[str] = Field(None, description="Current price in MOXIE")
    decimals: Optional[int] = Field(None, description="Token decimals, 18 when absent")

    model_config = ConfigDict(extra="allow")


class TokenHolding(BaseModel):
    """One entry of a user's fan token portfolio."""
    balance: str = Field(..., description="Wei-denominated balance")
    buyVolume: str = Field("0", description="Total MOXIE spent buying, wei-denominated")
    sellVolume: str = Field("0", description="Total MOXIE received selling, wei-denominated")
    subjectToken: SubjectTokenRef

    model_config = ConfigDict(extra="allow")

    @field_validator("balance", "buyVolume", "sellVolume", mode="before")
    @classmethod
    def stringify_amounts(cls, v):
        # The subgraph returns BigInts as strings, but tolerate numbers too
        if v is None:
            return "0"
        return str(v)


class HolderUser(BaseModel):
    id: str


class HolderBalance(BaseModel):
    """A holder entry in a subject token's portfolio."""
    balance: str
    user: Optional[HolderUser] = None


class SubjectToken(BaseModel):
    """Fan token with its price and holder list."""
    id: str = Field(..., description="Token contract address")
    name: str
    symbol: str
    currentPriceInMoxie: Optional[str] = None
    portfolio: List[HolderBalance] = Field(default_factory=list)

    @property
    def holder_count(self) -> int:
        return len(self.portfolio)


class FanTokenAddress(BaseModel):
    """Result of looking up a fan token by symbol prefix."""
    address: str
    name: str
    symbol: str
    decimals: Optional[int] = None


class TokenLockWallet(BaseModel):
    """Vesting contract holding locked tokens for a beneficiary."""
    address: str
    beneficiary: str
