"""Route-level tests for the frame endpoints.

Upstream clients are replaced through FastAPI dependency overrides.
"""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_airstack_client, get_dune_client, get_moxie_client, get_settings
from app.clients.dune import DuneClient
from app.clients.errors import ProfileNotFoundError, UpstreamError
from app.config import Settings
from app.main import app
from app.models.farcaster_models import FarcasterScore, FarcasterSocial, ProfileInfo
from app.models.token_models import HolderBalance, SubjectToken, SubjectTokenRef, TokenHolding

ONE_TOKEN = "1000000000000000000"
FIVE_TOKENS = "5000000000000000000"


def _profile(name: str = "Alice", image: str = "https://img/alice.png") -> ProfileInfo:
    return ProfileInfo(farcasterSocial=FarcasterSocial(
        profileDisplayName=name,
        profileImage=image,
        profileBio="gm",
        followerCount=1500,
        followingCount=20,
        farcasterScore=FarcasterScore(farScore=3.25),
    ))


def _holding(balance: str, symbol: str, name: str = None) -> TokenHolding:
    return TokenHolding(
        balance=balance,
        buyVolume=ONE_TOKEN,
        sellVolume="0",
        subjectToken=SubjectTokenRef(name=name or symbol, symbol=symbol, currentPriceInMoxie="2500"),
    )


@pytest.fixture
def airstack() -> MagicMock:
    client = MagicMock()
    client.get_profile_info = AsyncMock(return_value=_profile())
    client.get_powerboost_score = AsyncMock(return_value=1.5)
    client.get_farcaster_addresses = AsyncMock(return_value=["0xCustody"])
    return client


@pytest.fixture
def moxie() -> MagicMock:
    client = MagicMock()
    client.get_fan_token_info = AsyncMock(return_value=SubjectToken(
        id="0xtoken",
        name="fid:3",
        symbol="fid:3",
        currentPriceInMoxie="12.5",
        portfolio=[HolderBalance(balance="1"), HolderBalance(balance="2")],
    ))
    client.get_vesting_contract_address = AsyncMock(return_value=None)
    client.get_portfolio_page = AsyncMock(return_value=[
        _holding(ONE_TOKEN, "mychannel"),
        _holding(FIVE_TOKENS, "fid:7", name="fid:7"),
    ])
    return client


@pytest.fixture
def client(airstack, moxie):
    app.dependency_overrides[get_settings] = lambda: Settings(public_base_url="https://frames.example")
    app.dependency_overrides[get_airstack_client] = lambda: airstack
    app.dependency_overrides[get_moxie_client] = lambda: moxie
    app.dependency_overrides[get_dune_client] = lambda: None
    yield TestClient(app)
    app.dependency_overrides.clear()


def _action(fid=3) -> dict:
    return {"untrustedData": {"fid": fid, "buttonIndex": 1}}


def _labels(body: dict) -> list:
    return [b["label"] for b in body["buttons"]]


def _boxes(body: dict) -> dict:
    return {box["label"]: box["value"] for box in body["card"]["text_boxes"]}


class TestHome:
    def test_home_frame(self, client) -> None:
        response = client.get("/api/")

        assert response.status_code == 200
        assert _labels(response.json()) == ["Your Fan Token"]
        assert response.json()["buttons"][0]["target"] == "/yourfantoken"


class TestMissingFid:
    @pytest.mark.parametrize("path", ["/api/profile", "/api/yourfantoken", "/api/owned-tokens"])
    def test_action_without_fid_renders_error_frame(self, client, path) -> None:
        response = client.post(path, json={"untrustedData": {}})

        body = response.json()
        assert response.status_code == 200
        assert body["card"]["title"] == "Error: No FID"
        assert _labels(body) == ["Back"]

    def test_action_without_body(self, client) -> None:
        response = client.post("/api/yourfantoken")

        assert response.json()["card"]["title"] == "Error: No FID"

    def test_share_without_fid(self, client) -> None:
        response = client.get("/api/share")

        assert response.json()["card"]["title"] == "Error: No FID"


class TestProfileFrame:
    def test_profile(self, client) -> None:
        body = client.post("/api/profile", json=_action()).json()

        assert body["card"]["title"] == "Alice's Profile"
        assert _boxes(body)["Followers"] == "1.50K"
        assert _boxes(body)["Following"] == "20"
        assert _boxes(body)["FarScore"] == "3.25"
        assert _labels(body) == ["Back", "Refresh", "Fan Token", "Share"]

    def test_profile_not_found(self, client, airstack) -> None:
        airstack.get_profile_info.return_value = None

        body = client.get("/api/share-profile", params={"fid": 3}).json()

        assert body["card"]["title"] == "No Farcaster profile found for FID 3"


class TestFanTokenFrame:
    def test_interactive(self, client) -> None:
        body = client.post("/api/yourfantoken", json=_action()).json()

        assert body["card"]["title"] == "My Fan Token"
        assert _boxes(body) == {"Current Price": "12.50 MOXIE", "Powerboost": "1.50", "Holders": "2"}
        assert _labels(body) == ["Back", "Refresh", "Owned", "Share"]
        share = body["buttons"][3]
        assert share["action"] == "link"
        assert share["target"].startswith("https://warpcast.com/~/compose?text=")
        assert "frames.example" in share["target"]

    def test_shared(self, client) -> None:
        body = client.get("/api/share", params={"fid": 3, "timestamp": 1}).json()

        assert body["card"]["title"] == "Alice's Fan Token"
        assert _labels(body) == ["Check Your Fan Token"]

    def test_no_fan_token_is_empty_state(self, client, moxie) -> None:
        moxie.get_fan_token_info.return_value = None

        body = client.post("/api/yourfantoken", json=_action()).json()

        assert body["card"]["title"] == "No fan token found for FID 3"
        assert _labels(body) == ["Back"]

    def test_null_price_renders_na(self, client, moxie) -> None:
        moxie.get_fan_token_info.return_value = SubjectToken(id="0xt", name="fid:3", symbol="fid:3")

        body = client.post("/api/yourfantoken", json=_action()).json()

        assert _boxes(body)["Current Price"] == "N/A"
        assert _boxes(body)["Holders"] == "0"

    def test_upstream_error_renders_error_frame(self, client, moxie) -> None:
        moxie.get_fan_token_info.side_effect = UpstreamError("HTTP 500")

        body = client.post("/api/yourfantoken", json=_action()).json()

        assert body["card"]["title"] == "Error fetching fan token data. Please try again."
        assert _labels(body) == ["Home"]

    def test_powerboost_failure_is_not_fatal(self, client, airstack) -> None:
        airstack.get_powerboost_score.side_effect = UpstreamError("timeout")

        body = client.post("/api/yourfantoken", json=_action()).json()

        assert _boxes(body)["Powerboost"] == "N/A"

    def test_analytics_fields(self, client) -> None:
        dune = MagicMock()
        dune.get_query_rows = AsyncMock(return_value=[
            {"fid": 2, "total_earned": 10},
            {"fid": 3, "total_earned": 12000},
        ])
        app.dependency_overrides[get_settings] = lambda: Settings(analytics_query_id=7, dune_api_key="k")
        app.dependency_overrides[get_dune_client] = lambda: dune

        body = client.post("/api/yourfantoken", json=_action()).json()

        assert _boxes(body)["Total Earned"] == "12.00K"
        dune.get_query_rows.assert_awaited_once_with(7)

    def test_analytics_gateway_page_is_not_fatal(self, client) -> None:
        http = httpx.AsyncClient(transport=httpx.MockTransport(
            lambda request: httpx.Response(200, text="<html>gateway</html>")
        ))
        dune = DuneClient(http, "k", "https://api.dune.com/api/v1")
        app.dependency_overrides[get_settings] = lambda: Settings(analytics_query_id=7, dune_api_key="k")
        app.dependency_overrides[get_dune_client] = lambda: dune

        response = client.post("/api/yourfantoken", json=_action())

        assert response.status_code == 200
        assert _boxes(response.json()) == {"Current Price": "12.50 MOXIE", "Powerboost": "1.50", "Holders": "2"}

    def test_analytics_infinite_values(self, client) -> None:
        dune = MagicMock()
        dune.get_query_rows = AsyncMock(return_value=[
            {"fid": float("inf"), "total_earned": 1},
            {"fid": 3, "total_earned": float("inf")},
        ])
        app.dependency_overrides[get_settings] = lambda: Settings(analytics_query_id=7, dune_api_key="k")
        app.dependency_overrides[get_dune_client] = lambda: dune

        response = client.post("/api/yourfantoken", json=_action())

        assert response.status_code == 200
        assert _boxes(response.json())["Total Earned"] == "N/A"


class TestOwnedTokensFrame:
    def test_first_token_is_largest_balance(self, client, moxie) -> None:
        body = client.post("/api/owned-tokens", json=_action()).json()

        assert body["card"]["position"] == "1 of 2"
        assert body["card"]["title"] == "Alice"
        assert _boxes(body)["Balance"] == "5.00 tokens"
        assert _boxes(body)["Buy Volume"] == "1.00 MOXIE"
        assert _boxes(body)["Current Price"] == "2.50K MOXIE"
        assert _labels(body) == ["Home", "Next", "Share"]
        next_button = body["buttons"][1]
        assert next_button["target"] == "/owned-tokens?cursor=1"
        assert next_button["value"] == "1"
        owners = moxie.get_portfolio_page.await_args.args[0]
        assert owners == ["0xcustody"]

    def test_last_token_has_previous_only(self, client, airstack) -> None:
        body = client.post("/api/owned-tokens", params={"cursor": 1}, json=_action()).json()

        assert body["card"]["position"] == "2 of 2"
        assert body["card"]["title"] == "mychannel"
        assert body["card"]["badge"] == "Channel"
        assert _labels(body) == ["Home", "Previous", "Share"]
        assert body["buttons"][1]["target"] == "/owned-tokens?cursor=0"
        # Channel tokens have no owner profile to look up
        airstack.get_profile_info.assert_not_awaited()

    def test_negative_cursor_is_clamped(self, client) -> None:
        body = client.post("/api/owned-tokens", params={"cursor": -4}, json=_action()).json()

        assert body["card"]["position"] == "1 of 2"

    def test_cursor_past_end(self, client) -> None:
        body = client.get("/api/share-owned", params={"fid": 3, "tokenIndex": 9}).json()

        assert body["card"]["title"] == "No fan token found for this index"

    def test_no_holdings(self, client, moxie) -> None:
        moxie.get_portfolio_page.return_value = []

        body = client.post("/api/owned-tokens", json=_action()).json()

        assert body["card"]["title"] == "No fan tokens found for FID 3"
        assert _labels(body) == ["Back"]

    def test_unknown_profile_renders_error_frame(self, client, airstack) -> None:
        airstack.get_farcaster_addresses.side_effect = ProfileNotFoundError("No Farcaster profile found for FID: 3")

        body = client.post("/api/owned-tokens", json=_action()).json()

        assert body["card"]["title"] == "Error fetching fan token data. Please try again."

    def test_owner_profile_failure_falls_back_to_token_name(self, client, airstack) -> None:
        airstack.get_profile_info.side_effect = UpstreamError("HTTP 502")

        body = client.post("/api/owned-tokens", json=_action()).json()

        assert body["card"]["title"] == "fid:7"

    def test_shared(self, client) -> None:
        body = client.get("/api/share-owned", params={"fid": 3, "tokenIndex": 0, "timestamp": 5}).json()

        assert body["card"]["position"] is None
        assert _labels(body) == ["Check Your Owned Tokens"]
