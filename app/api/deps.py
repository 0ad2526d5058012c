"""
FastAPI dependencies handing settings and upstream clients to handlers.
"""
import httpx
from typing import Optional
from fastapi import Depends, Request

from app.config import Settings
from app.clients.airstack import AirstackClient
from app.clients.dune import DuneClient
from app.clients.graphql import GraphQLClient
from app.clients.moxie import MoxieClient


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def get_airstack_client(
    settings: Settings = Depends(get_settings),
    http: httpx.AsyncClient = Depends(get_http_client),
) -> AirstackClient:
    graphql = GraphQLClient(
        http, settings.airstack_api_url, headers={"Authorization": settings.airstack_api_key}
    )
    return AirstackClient(graphql)


def get_moxie_client(
    settings: Settings = Depends(get_settings),
    http: httpx.AsyncClient = Depends(get_http_client),
) -> MoxieClient:
    return MoxieClient(
        protocol=GraphQLClient(http, settings.moxie_api_url),
        vesting=GraphQLClient(http, settings.moxie_vesting_api_url),
    )


def get_dune_client(
    settings: Settings = Depends(get_settings),
    http: httpx.AsyncClient = Depends(get_http_client),
) -> Optional[DuneClient]:
    """Dune client, or None when no analytics query is configured."""
    if settings.analytics_query_id is None or not settings.dune_api_key:
        return None
    return DuneClient(http, settings.dune_api_key, settings.dune_api_url)
