"""
Transaction history source over Solana RPC (solana-py).

get_signatures returns the most recent signatures (newest first, bounded by
limit); get_parsed_transactions resolves each with encoding="jsonParsed" and
returns raw RPC result dicts (None where the node has no transaction). Any
RPC failure, including 429, is raised as CollaboratorError with stage history.
"""

from __future__ import annotations

import json
from typing import Any, Sequence

from interest_profiler.config.env import DEFAULT_REQUEST_TIMEOUT, MAX_TX_SCAN_LIMIT
from interest_profiler.core.exceptions import STAGE_HISTORY, as_collaborator_error
from interest_profiler.profiler_logging import get_logger, short_address

logger = get_logger(__name__)


def _resp_result(resp: Any) -> Any:
    """Raw JSON-RPC result of a solders response (camelCase keys, as the RPC sends them)."""
    if resp is None:
        return None
    to_json = getattr(resp, "to_json", None)
    if callable(to_json):
        return json.loads(to_json()).get("result")
    if isinstance(resp, dict):
        return resp.get("result", resp)
    return getattr(resp, "value", None)


class RpcTransactionHistory:
    """Recent parsed transactions for an address."""

    def __init__(self, rpc_url: str, *, timeout: float = DEFAULT_REQUEST_TIMEOUT, client: Any = None) -> None:
        if client is None:
            from solana.rpc.api import Client

            client = Client(rpc_url, timeout=timeout)
        self.rpc_url = rpc_url
        self.client = client

    def get_signatures(self, address: str, limit: int) -> list[str]:
        from solders.pubkey import Pubkey

        limit = max(1, min(int(limit), MAX_TX_SCAN_LIMIT))
        try:
            resp = self.client.get_signatures_for_address(Pubkey.from_string(address), limit=limit)
        except Exception as e:
            raise as_collaborator_error(STAGE_HISTORY, e) from e
        items = _resp_result(resp) or []
        signatures = []
        for item in items:
            sig = item.get("signature") if isinstance(item, dict) else getattr(item, "signature", None)
            if sig:
                signatures.append(str(sig))
        logger.debug("rpc_signatures_fetched", wallet=short_address(address), count=len(signatures))
        return signatures[:limit]

    def get_parsed_transactions(self, signatures: Sequence[str]) -> list[dict[str, Any] | None]:
        from solders.signature import Signature

        out: list[dict[str, Any] | None] = []
        for sig in signatures:
            try:
                resp = self.client.get_transaction(
                    Signature.from_string(sig),
                    encoding="jsonParsed",
                    max_supported_transaction_version=0,
                )
            except Exception as e:
                raise as_collaborator_error(STAGE_HISTORY, e) from e
            result = _resp_result(resp)
            out.append(result if isinstance(result, dict) else None)
        return out
