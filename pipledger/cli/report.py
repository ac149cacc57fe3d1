"""CLI report — prints calculator results to the console."""


def _money(value, currency: str = "USD") -> str:
    if value is None:
        return "N/A"
    if currency == "USD":
        return f"${value:,.2f}"
    return f"{value:,.2f} {currency}"


def print_quote(quote: dict) -> str:
    """Format and print a pip/risk quote for one planned trade.

    Args:
        quote: Dict with ``symbol``, ``asset_class``, ``pip_size``,
            ``pip_value`` and optionally ``account_currency`` (default USD),
            ``lot_size``, ``risk_amount``, ``potential_profit``,
            ``risk_pct``, ``risk_reward_ratio``.

    Returns:
        The formatted string (also printed to stdout).
    """
    rr = quote.get("risk_reward_ratio")
    risk_pct = quote.get("risk_pct")
    lots = quote.get("lot_size")
    currency = quote.get("account_currency") or "USD"

    lines = [
        "──────────────── PipLedger Quote ─────────────────",
        f"  Symbol:          {quote.get('symbol', 'N/A')}",
        f"  Asset Class:     {quote.get('asset_class', 'N/A')}",
        f"  Pip Size:        {quote.get('pip_size', 'N/A')}",
        f"  Pip Value/Lot:   {_money(quote.get('pip_value'), currency)}",
        f"  Lot Size:        {lots:.2f}" if lots is not None else "  Lot Size:        N/A",
        f"  Risk Amount:     {_money(quote.get('risk_amount'), currency)}",
        f"  Risk:            {risk_pct:.2f}%" if risk_pct is not None else "  Risk:            N/A",
        f"  Potential Gain:  {_money(quote.get('potential_profit'), currency)}",
        f"  R:R:             1:{rr:.2f}" if rr is not None else "  R:R:             N/A",
        "──────────────────────────────────────────────────",
    ]
    output = "\n".join(lines)
    print(output)
    return output
