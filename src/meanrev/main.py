"""Entry point for the funding-rate signal desk.

Wires settings, logging, the market data client, the signal engine and the
scanner together, then either serves the FastAPI dashboard via uvicorn or,
with DASHBOARD_ENABLED=false, runs a single scan and logs the signals.

Component wiring order (in _build_components):
1. AppSettings (configuration)
2. Logging setup
3. MarketDataClient (Kraken Futures public endpoints via ccxt)
4. SignalEngine (z-score pipeline)
5. SignalScanner (concurrent per-symbol scans)
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI

from meanrev.config import AppSettings
from meanrev.logging import get_logger, setup_logging
from meanrev.market_data.kraken_client import KrakenFuturesClient
from meanrev.market_data.scanner import SignalScanner
from meanrev.signals.engine import SignalEngine


def _build_components(settings: AppSettings) -> dict[str, Any]:
    """Build the market data client, signal engine and scanner from settings.

    Note: Does NOT call client.connect() -- that happens in the lifespan
    (dashboard mode) or scan_once() (non-dashboard mode).
    """
    client = KrakenFuturesClient(settings.market)
    engine = SignalEngine(settings.analysis)
    scanner = SignalScanner(client, engine, settings.market)
    return {"client": client, "engine": engine, "scanner": scanner}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect the market data client on startup and close it on shutdown."""
    logger = get_logger("meanrev.main")
    components = app.state.components

    await components["client"].connect()
    app.state.scanner = components["scanner"]
    logger.info("lifespan_started", symbols=components["client"].tracked_symbols())

    try:
        yield
    finally:
        await components["client"].close()
        logger.info("signal_desk_stopped")


async def scan_once(components: dict[str, Any]) -> None:
    """Run one scan over all tracked symbols and log each signal."""
    logger = get_logger("meanrev.main")
    client = components["client"]
    try:
        await client.connect()
        report = await components["scanner"].scan()
    finally:
        await client.close()

    for analysis in report.analyses:
        logger.info(
            "signal",
            symbol=analysis.symbol,
            signal=analysis.signal.value,
            z_score=str(analysis.z_score),
            edge_score=str(analysis.edge_score),
            details=list(analysis.confirmation_details),
        )
    for error in report.errors:
        logger.warning("symbol_skipped", **error)


async def run() -> None:
    """Run the signal desk (dashboard server or single scan)."""
    # 1. Load settings
    settings = AppSettings()

    # 2. Setup logging
    setup_logging(settings.log_level, settings.log_format)
    logger = get_logger("meanrev.main")

    # 3-5. Build components
    components = _build_components(settings)

    if not settings.dashboard.enabled:
        await scan_once(components)
        return

    from meanrev.dashboard.app import create_dashboard_app

    app = create_dashboard_app(settings=settings, lifespan=lifespan)
    app.state.components = components

    logger.info(
        "starting_with_dashboard",
        host=settings.dashboard.host,
        port=settings.dashboard.port,
        exchange=settings.market.exchange_id,
    )

    config = uvicorn.Config(
        app,
        host=settings.dashboard.host,
        port=settings.dashboard.port,
        log_level="warning",  # Suppress uvicorn access logs
    )
    server = uvicorn.Server(config)
    await server.serve()


def main() -> None:
    """Synchronous entry point."""
    asyncio.run(run())


if __name__ == "__main__":
    main()
