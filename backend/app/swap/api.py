"""HTTP endpoints: price table, stateless quotes, exchange submission, SSE."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncGenerator
from typing import Literal

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from .conversion import received_from_send, send_from_received
from .interface import ExchangeExecutor
from .models import SwapState
from .prices import PriceBook
from .summary import approx_usd, build_summary
from .validity import is_valid

logger = logging.getLogger(__name__)


class ExchangeRequest(BaseModel):
    send_amount: float | None = None
    receive_amount: float | None = None
    send_asset: str | None = None
    receive_asset: str | None = None


def _prices_payload(price_book: PriceBook) -> dict:
    table = price_book.table
    return {
        "assets": table.assets,
        "prices": table.to_dict(),
        "version": price_book.version,
        "error": price_book.error,
    }


def create_swap_router(
    price_book: PriceBook,
    executor: ExchangeExecutor,
    stream_interval: float = 0.5,
) -> APIRouter:
    """Create the swap router bound to a price book and an executor.

    The factory keeps the PriceBook and executor out of module globals.
    """
    router = APIRouter(prefix="/api/swap", tags=["swap"])

    @router.get("/prices")
    async def get_prices() -> dict:
        """Latest resolved price per asset plus feed status."""
        return _prices_payload(price_book)

    @router.get("/quote")
    async def get_quote(
        send_asset: str,
        receive_asset: str,
        amount: float | None = None,
        side: Literal["send", "receive"] = "send",
    ) -> dict:
        """Derive the other side of a swap from one amount.

        ``side`` says which amount was given. Amounts that cannot be derived
        (unknown asset, no price) come back as null.
        """
        table = price_book.table
        if side == "send":
            send_amount = amount
            receive_amount = received_from_send(amount, send_asset, receive_asset, table)
        else:
            receive_amount = amount
            send_amount = send_from_received(amount, send_asset, receive_asset, table)

        state = SwapState(
            send_amount=send_amount,
            receive_amount=receive_amount,
            send_asset=send_asset,
            receive_asset=receive_asset,
            last_edited=side,
        )
        return {
            "send_amount": send_amount,
            "receive_amount": receive_amount,
            "send_asset": send_asset,
            "receive_asset": receive_asset,
            "approx_usd_send_amount": approx_usd(send_amount, send_asset, table),
            "approx_usd_receive_amount": approx_usd(receive_amount, receive_asset, table),
            "valid": is_valid(state),
        }

    @router.post("/exchange")
    async def post_exchange(body: ExchangeRequest) -> dict:
        """Validate a swap and hand its summary to the executor."""
        state = SwapState(
            send_amount=body.send_amount,
            receive_amount=body.receive_amount,
            send_asset=body.send_asset,
            receive_asset=body.receive_asset,
        )
        if not is_valid(state):
            raise HTTPException(
                status_code=422,
                detail="Swap needs positive amounts and two different assets",
            )
        summary = build_summary(state, price_book.table)
        executor.execute(summary)
        return summary.to_dict()

    @router.get("/stream")
    async def stream_prices(request: Request) -> StreamingResponse:
        """SSE endpoint pushing the price table whenever it changes.

        Events look like:

            data: {"assets": [...], "prices": {"ETH": 1645.93, ...}, "version": 3, "error": null}
        """
        return StreamingResponse(
            _generate_events(price_book, request, stream_interval),
            media_type="text/event-stream",
            headers={
                "Cache-Control": "no-cache",
                "Connection": "keep-alive",
                "X-Accel-Buffering": "no",  # Disable nginx buffering if proxied
            },
        )

    return router


def _sse_event(payload: dict) -> str:
    return f"data: {json.dumps(payload)}\n\n"


async def _price_snapshots(
    price_book: PriceBook,
    request: Request,
    interval: float,
) -> AsyncGenerator[dict, None]:
    """Poll the book and yield its payload each time a non-empty table is published."""
    seen_version: int | None = None
    while not await request.is_disconnected():
        version = price_book.version
        if version != seen_version and price_book.available:
            yield _prices_payload(price_book)
        seen_version = version
        await asyncio.sleep(interval)


async def _generate_events(
    price_book: PriceBook,
    request: Request,
    interval: float = 0.5,
) -> AsyncGenerator[str, None]:
    """SSE body: a reconnect hint, then one event per price table version."""
    peer = request.client.host if request.client else "unknown"
    logger.info("Price stream opened for %s", peer)

    yield "retry: 1000\n\n"
    sent = 0
    try:
        async for payload in _price_snapshots(price_book, request, interval):
            sent += 1
            yield _sse_event(payload)
    except asyncio.CancelledError:
        logger.info("Price stream for %s cancelled after %d events", peer, sent)
        raise
    logger.info("Price stream for %s closed after %d events", peer, sent)
