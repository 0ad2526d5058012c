"""
Dune analytics client for pre-registered queries.
"""
import logging
import httpx
from typing import Dict, Any, List

from app.clients.errors import UpstreamError

# Set up logging
logger = logging.getLogger(__name__)


class DuneClient:
    """Reads the latest results of saved Dune queries."""

    def __init__(self, http: httpx.AsyncClient, api_key: str, base_url: str):
        self.http = http
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")

    async def get_query_rows(self, query_id: int) -> List[Dict[str, Any]]:
        """
        Fetch the rows of the latest execution of a query.

        Raises:
            UpstreamError: on transport failure, a non-2xx status, or a body
                that is not a JSON object.
        """
        url = f"{self.base_url}/query/{query_id}/results"
        try:
            response = await self.http.get(url, headers={"X-Dune-API-Key": self.api_key})
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(f"Dune query {query_id} failed: {e.response.status_code} - {e.response.text}")
            raise UpstreamError(
                f"HTTP {e.response.status_code} from Dune", status_code=e.response.status_code
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Dune query {query_id} request failed: {str(e)}")
            raise UpstreamError(f"Request to Dune failed: {str(e)}") from e

        try:
            body = response.json()
        except ValueError as e:
            logger.error(f"Dune query {query_id} returned invalid JSON")
            raise UpstreamError(f"Invalid JSON from Dune query {query_id}") from e
        if not isinstance(body, dict):
            raise UpstreamError(f"Unexpected response shape from Dune query {query_id}")

        result = body.get("result")
        rows = result.get("rows") if isinstance(result, dict) else None
        rows = [row for row in rows if isinstance(row, dict)] if isinstance(rows, list) else []
        logger.info(f"Dune query {query_id} returned {len(rows)} rows")
        return rows


def _same_fid(value, fid) -> bool:
    try:
        return int(float(value)) == int(fid)
    except (TypeError, ValueError, OverflowError):
        return str(value) == str(fid)


def filter_rows_by_fid(rows: List[Dict[str, Any]], fid, field: str = "fid") -> List[Dict[str, Any]]:
    """Keep rows whose `field` holds the given FID."""
    return [row for row in rows if row.get(field) is not None and _same_fid(row[field], fid)]
