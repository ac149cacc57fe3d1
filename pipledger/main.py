"""PipLedger — application entry point.

Exposes the calculator API as a FastAPI app and provides the CLI entry
point for serving the API and for one-off quotes and settlements.
"""

import logging

from fastapi import FastAPI

from pipledger.api.routers import configure_routers, router
from pipledger.config import Config, build_reference_data
from pipledger.instruments.resolver import InstrumentResolver
from pipledger.risk.position_sizer import PositionSizer
from pipledger.risk.valuation import ValuationEngine
from pipledger.trades.settlement import TradeSettler, risk_reward_ratio

app = FastAPI(title="PipLedger Calculator API", version="0.1.0")
app.include_router(router)

logger = logging.getLogger("pipledger")


@app.get("/health")
async def health():
    """Liveness probe."""
    return {"status": "ok"}


def build_services(config: Config) -> tuple[ValuationEngine, PositionSizer, TradeSettler]:
    """Wire the resolver, engine, sizer, and settler from *config*."""
    engine = ValuationEngine(InstrumentResolver(build_reference_data(config)))
    return (
        engine,
        PositionSizer(engine),
        TradeSettler(engine, lot_basis=config.settlement_lot_basis),
    )


def build_quote(
    engine: ValuationEngine,
    sizer: PositionSizer,
    symbol: str,
    entry: float,
    stop: float,
    target: float | None = None,
    lots: float | None = None,
    balance: float | None = None,
    risk_pct: float | None = None,
    account_currency: str = "USD",
) -> dict:
    """Assemble the figures shown by ``pipledger quote``.

    When *lots* is omitted and a *balance* is given, the suggested lot size
    for *risk_pct* is used.
    """
    spec = engine.resolver.resolve_spec(symbol)
    if lots is None and balance:
        lots = sizer.suggested_lot_size(
            symbol, entry, stop, balance, risk_pct or 0.0, account_currency,
        )

    quote = {
        "symbol": symbol,
        "account_currency": account_currency,
        "asset_class": spec.asset_class,
        "pip_size": spec.pip_size,
        "pip_value": engine.pip_value(symbol, account_currency),
        "lot_size": lots,
        "risk_amount": None,
        "risk_pct": None,
        "potential_profit": None,
        "risk_reward_ratio": risk_reward_ratio(entry, stop, target),
    }
    if lots is not None:
        quote["risk_amount"] = engine.risk_amount(symbol, lots, entry, stop, account_currency)
        if target is not None:
            quote["potential_profit"] = engine.potential_profit(
                symbol, lots, entry, target, account_currency,
            )
        if balance:
            quote["risk_pct"] = sizer.risk_percentage_from_lot_size(
                symbol, lots, entry, stop, balance, account_currency,
            )
    return quote


# ── CLI ──────────────────────────────────────────────────────────────────


def _run_cli(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and dispatch to the requested command."""
    import argparse

    from pipledger.cli.report import print_quote
    from pipledger.config import load_config
    from pipledger.trades.models import Trade

    parser = argparse.ArgumentParser(description="PipLedger pip and P&L calculator")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("serve", help="Run the calculator API")

    quote = sub.add_parser("quote", help="Price a planned trade")
    quote.add_argument("symbol")
    quote.add_argument("--entry", type=float, required=True)
    quote.add_argument("--stop", type=float, required=True)
    quote.add_argument("--target", type=float)
    quote.add_argument("--lots", type=float)
    quote.add_argument("--balance", type=float)
    quote.add_argument("--risk-pct", type=float)

    settle = sub.add_parser("settle", help="Compute realized P&L of a closed trade")
    settle.add_argument("symbol")
    settle.add_argument("--side", choices=["buy", "sell", "long", "short"], required=True)
    settle.add_argument("--quantity", type=float, required=True)
    settle.add_argument("--entry", type=float, required=True)
    settle.add_argument("--exit", type=float, required=True)
    settle.add_argument("--fees", type=float, default=0.0)
    settle.add_argument("--commission", type=float, default=0.0)

    args = parser.parse_args(argv)
    config = load_config()

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    engine, sizer, settler = build_services(config)

    if args.command == "serve":
        import uvicorn

        configure_routers(
            engine=engine,
            settler=settler,
            account_currency=config.account_currency,
            default_risk_pct=config.default_risk_pct,
            max_risk_pct=config.max_risk_pct,
        )
        logger.info("Calculator API available at http://localhost:%d", config.api_port)
        uvicorn.run(app, host="0.0.0.0", port=config.api_port, log_level="info")
    elif args.command == "quote":
        print_quote(build_quote(
            engine, sizer, args.symbol, args.entry, args.stop,
            target=args.target,
            lots=args.lots,
            balance=args.balance,
            risk_pct=args.risk_pct if args.risk_pct is not None else config.default_risk_pct,
            account_currency=config.account_currency,
        ))
    else:
        trade = Trade(
            symbol=args.symbol,
            side=args.side,
            quantity=args.quantity,
            entry_price=args.entry,
            exit_price=args.exit,
            status="closed",
            fees=args.fees,
            commission=args.commission,
        )
        pnl = settler.settle(trade, config.account_currency)
        print(f"Net P&L: {pnl:,.2f} {config.account_currency}")


if __name__ == "__main__":
    _run_cli()
