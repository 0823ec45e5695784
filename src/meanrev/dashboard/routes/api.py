"""JSON API endpoints for signals, funding history, position sizing and progress."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from meanrev import __version__
from meanrev.analytics.progress import calculate_progress
from meanrev.position.profiles import RISK_PROFILES, RiskMode

log = structlog.get_logger(__name__)

router = APIRouter()

_ZERO = Decimal("0")


def _parse_symbols(symbols: str | None) -> list[str] | None:
    """Split a comma-separated symbols query param, None for all tracked."""
    if not symbols:
        return None
    parsed = [s.strip().upper() for s in symbols.split(",") if s.strip()]
    return parsed or None


def _parse_positive_decimal(value: object, field: str) -> Decimal:
    """Convert a request value to a positive Decimal.

    Raises:
        ValueError: If the value is missing, malformed, or not positive.
    """
    if value is None:
        raise ValueError(f"Missing required field: {field}")
    try:
        result = Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"Invalid {field}: {value}") from e
    if not result.is_finite() or result <= _ZERO:
        raise ValueError(f"{field} must be positive")
    return result


def _scanner_unavailable() -> JSONResponse:
    return JSONResponse(
        content={"success": False, "error": "Signal scanner not available"},
        status_code=503,
    )


@router.get("/signals")
async def get_signals(request: Request, symbols: str | None = None) -> JSONResponse:
    """Scan tracked symbols and return signals sorted by |z-score|.

    Query params:
        symbols: Optional comma-separated asset codes (e.g., "BTC,ETH").
    """
    scanner = request.app.state.scanner
    if scanner is None:
        return _scanner_unavailable()

    report = await scanner.scan(_parse_symbols(symbols))
    return JSONResponse(content={
        "success": True,
        "timestamp": report.timestamp.isoformat(),
        "signals": [a.to_dict() for a in report.analyses],
        "errors": report.errors or None,
        "meta": {
            "assets_tracked": len(scanner.tracked_symbols()),
            "signals_generated": len(report.analyses),
            "exchange": request.app.state.settings.market.exchange_id,
        },
    })


@router.get("/funding")
async def get_funding(request: Request, symbols: str | None = None) -> JSONResponse:
    """Analyses enriched with ticker data and recent funding history for charts."""
    scanner = request.app.state.scanner
    if scanner is None:
        return _scanner_unavailable()

    report = await scanner.scan(_parse_symbols(symbols))
    data = []
    for analysis in report.analyses:
        ticker = report.tickers.get(analysis.symbol)
        history = report.funding_history.get(analysis.symbol, [])
        data.append({
            **analysis.to_dict(),
            "ticker": ticker.to_dict() if ticker is not None else None,
            "funding_history": [s.to_dict() for s in history],
        })

    return JSONResponse(content={
        "success": True,
        "timestamp": report.timestamp.isoformat(),
        "data": data,
        "errors": report.errors or None,
    })


@router.post("/position")
async def size_position(request: Request) -> JSONResponse:
    """Size a trade on the latest analysis of a symbol.

    Expects JSON body with: symbol, capital, risk_mode (LOW/MEDIUM/HIGH/ULTRA).

    Returns:
        JSON PositionSizing, 404 without a current analysis, 409 for NEUTRAL.
    """
    scanner = request.app.state.scanner
    if scanner is None:
        return _scanner_unavailable()

    try:
        body = await request.json()
    except Exception:
        return JSONResponse(content={"error": "Invalid JSON body"}, status_code=400)
    if not isinstance(body, dict):
        return JSONResponse(content={"error": "Invalid JSON body"}, status_code=400)

    for field in ("symbol", "capital", "risk_mode"):
        if field not in body:
            return JSONResponse(
                content={"error": f"Missing required field: {field}"}, status_code=400
            )

    try:
        capital = _parse_positive_decimal(body["capital"], "capital")
        risk_mode = RiskMode(str(body["risk_mode"]).upper())
    except ValueError as e:
        return JSONResponse(content={"error": str(e)}, status_code=400)

    symbol = str(body["symbol"]).upper()
    analysis = scanner.get_analysis(symbol)
    if analysis is None:
        return JSONResponse(
            content={"error": f"No analysis available for {symbol}"}, status_code=404
        )
    if not analysis.signal.is_actionable:
        return JSONResponse(
            content={"error": f"No trade: {symbol} signal is NEUTRAL"}, status_code=409
        )

    sizing = request.app.state.position_sizer.calculate(analysis, capital, risk_mode)
    log.info(
        "position_requested",
        symbol=symbol,
        risk_mode=risk_mode.value,
        signal=analysis.signal.value,
    )
    return JSONResponse(content={
        "symbol": symbol,
        "signal": analysis.signal.value,
        "risk_mode": risk_mode.value,
        **sizing.to_dict(),
    })


@router.get("/progress")
async def get_progress(
    request: Request,
    current: str,
    start: str | None = None,
    goal: str | None = None,
) -> JSONResponse:
    """Linear and log-scaled progress toward the capital goal.

    Query params:
        current: Current capital.
        start: Starting capital (default PROGRESS_START_CAPITAL).
        goal: Goal capital (default PROGRESS_GOAL_CAPITAL).
    """
    defaults = request.app.state.settings.progress
    try:
        current_dec = _parse_positive_decimal(current, "current")
        start_dec = (
            _parse_positive_decimal(start, "start") if start else defaults.start_capital
        )
        goal_dec = _parse_positive_decimal(goal, "goal") if goal else defaults.goal_capital
    except ValueError as e:
        return JSONResponse(content={"error": str(e)}, status_code=400)

    if goal_dec <= start_dec:
        return JSONResponse(
            content={"error": "goal must be greater than start"}, status_code=400
        )

    progress = calculate_progress(current_dec, start_dec, goal_dec)
    return JSONResponse(content={
        "current": str(current_dec),
        "start": str(start_dec),
        "goal": str(goal_dec),
        **progress.to_dict(),
    })


@router.get("/profiles")
async def get_profiles() -> JSONResponse:
    """Risk profile table."""
    return JSONResponse(content=[p.to_dict() for p in RISK_PROFILES.values()])


@router.get("/status")
async def get_status(request: Request) -> JSONResponse:
    """Service status: tracked symbols, exchange and last scan time."""
    settings = request.app.state.settings
    scanner = request.app.state.scanner
    latest = scanner.latest if scanner is not None else None
    return JSONResponse(content={
        "version": __version__,
        "exchange": settings.market.exchange_id,
        "symbols": scanner.tracked_symbols() if scanner is not None else [],
        "scanner_ready": scanner is not None,
        "last_scan": latest.timestamp.isoformat() if latest is not None else None,
    })
