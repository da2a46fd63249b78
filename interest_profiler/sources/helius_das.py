"""
Helius DAS asset source: getAssetsByOwner and getBalance over JSON-RPC.

Requires HELIUS_API_KEY (or an explicit Helius RPC URL). Assets are paged with
page size ASSET_PAGE_SIZE until a short page comes back or max_pages is hit.
Errors are raised as CollaboratorError; these inputs are required for the tier,
so callers must not default them.
"""

from __future__ import annotations

from typing import Any

import requests

from interest_profiler.config.env import DEFAULT_ASSET_PAGE_LIMIT, DEFAULT_REQUEST_TIMEOUT
from interest_profiler.core.exceptions import (
    STAGE_ASSETS,
    STAGE_BALANCE,
    CollaboratorError,
    RateLimitedError,
    as_collaborator_error,
)
from interest_profiler.profiler_logging import get_logger, mask_api_key, short_address

logger = get_logger(__name__)

ASSET_PAGE_SIZE = 1000
RPC_REQUEST_ID = "interest-profiler"


class HeliusAssetSource:
    """Asset and balance lookups against a Helius RPC endpoint."""

    def __init__(
        self,
        rpc_url: str,
        *,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        max_pages: int = DEFAULT_ASSET_PAGE_LIMIT,
    ) -> None:
        self.rpc_url = rpc_url
        self.timeout = timeout
        self.max_pages = max(1, int(max_pages))

    def _rpc(self, stage: str, method: str, params: Any) -> Any:
        payload = {
            "jsonrpc": "2.0",
            "id": RPC_REQUEST_ID,
            "method": method,
            "params": params,
        }
        try:
            resp = requests.post(self.rpc_url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise as_collaborator_error(stage, e) from e
        if resp.status_code == 429:
            raise RateLimitedError(stage, f"{method}: 429 Too Many Requests")
        try:
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            raise as_collaborator_error(stage, e) from e
        err = data.get("error")
        if err:
            message = err.get("message", str(err)) if isinstance(err, dict) else str(err)
            raise as_collaborator_error(stage, RuntimeError(f"{method}: {message}"))
        return data.get("result")

    def get_assets_by_owner(self, address: str) -> list[dict[str, Any]]:
        """All assets owned by address (NFTs and fungible tokens), across pages."""
        items: list[dict[str, Any]] = []
        for page in range(1, self.max_pages + 1):
            result = self._rpc(
                STAGE_ASSETS,
                "getAssetsByOwner",
                {"ownerAddress": address, "page": page, "limit": ASSET_PAGE_SIZE},
            )
            if not isinstance(result, dict):
                raise CollaboratorError(STAGE_ASSETS, "getAssetsByOwner returned no result")
            page_items = [item for item in result.get("items") or [] if isinstance(item, dict)]
            items.extend(page_items)
            if len(page_items) < ASSET_PAGE_SIZE:
                break
        else:
            logger.warning(
                "helius_asset_page_limit_reached",
                wallet=short_address(address),
                pages=self.max_pages,
                items=len(items),
            )
        logger.debug(
            "helius_assets_fetched",
            wallet=short_address(address),
            items=len(items),
            rpc=mask_api_key(self.rpc_url),
        )
        return items

    def get_balance(self, address: str) -> int:
        """Native balance in lamports."""
        result = self._rpc(STAGE_BALANCE, "getBalance", [address])
        value = result.get("value") if isinstance(result, dict) else result
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise CollaboratorError(STAGE_BALANCE, f"unexpected getBalance result: {result!r}") from e
