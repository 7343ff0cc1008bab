"""
Public API Example

This example demonstrates how to use Bybit's public market endpoints.
No authentication is required for these endpoints.

Endpoints covered:
- Latest ticker of a symbol
- Contract specification (leverage, price and lot size filters)
"""

from bybit_v5 import BybitApiClient, Category, get_version
from bybit_v5.helpers import floor_to_decimals


def example_public_api() -> None:
    """Demonstrate the public market endpoints without authentication."""

    print("=" * 70)
    print("Bybit Public API Example")
    print("=" * 70)

    # Display SDK version
    ver = get_version()
    print(f"\n[Info] Bybit V5 Python SDK Version: {ver}\n")

    # Initialize client without authentication (for public endpoints only)
    print("[Setup] Initializing API client (no authentication needed)...")
    bybit = BybitApiClient()

    # ==================================================================
    # TICKER
    # ==================================================================
    print("\n" + "=" * 70)
    print("1. TICKER")
    print("=" * 70)

    print("\n[Fetching] Ticker for BTCUSDT perpetual...")
    ticker = bybit.get_ticker(Category.LINEAR, "BTCUSDT")

    print(f"\n[Symbol] {ticker.symbol}")
    print(f"  Last Price:  ${ticker.last_price}")
    print(f"  Mark Price:  ${ticker.mark_price}")
    print(f"  Index Price: ${ticker.index_price}")
    print(f"  Best Bid:    ${ticker.bid1_price} (qty: {ticker.bid1_size})")
    print(f"  Best Ask:    ${ticker.ask1_price} (qty: {ticker.ask1_size})")
    print(f"  24h Change:  {ticker.price_24h_pcnt * 100:.2f}%")
    print(f"  Funding:     {ticker.funding_rate} (next: {ticker.next_funding_time})")

    # Spot tickers carry no derivatives fields
    spot = bybit.get_ticker(Category.SPOT, "BTCUSDT")
    print(f"\n[Spot] {spot.symbol} last ${spot.last_price}, mark {spot.mark_price}")

    # ==================================================================
    # CONTRACT SPECIFICATION
    # ==================================================================
    print("\n" + "=" * 70)
    print("2. CONTRACT SPECIFICATION")
    print("=" * 70)

    print("\n[Fetching] Instrument info for ETHUSDT...")
    info = bybit.get_instrument_info(Category.LINEAR, "ETHUSDT")

    print(f"\n[Contract] {info.symbol} ({info.contract_type}, {info.status})")
    print(f"  Settles in:  {info.settle_coin}")
    print(f"  Leverage:    {info.leverage_filter.min_leverage}"
          f" - {info.leverage_filter.max_leverage}")
    print(f"  Tick Size:   {info.price_filter.tick_size}")
    print(f"  Qty Step:    {info.lot_size_filter.qty_step}")
    print(f"  Min Qty:     {info.lot_size_filter.min_order_qty}")

    # Round a desired quantity down to the contract's step
    desired = 0.123456
    decimals = len(f"{info.lot_size_filter.qty_step}".split(".")[-1])
    print(f"\n[Rounding] {desired} -> {floor_to_decimals(desired, decimals)}")

    # ==================================================================
    # SUMMARY
    # ==================================================================
    print("\n" + "=" * 70)
    print("Example completed successfully!")
    print("=" * 70)
    print("\n[Note] Market endpoints can be called without authentication.")
    print(
        "[Note] For authenticated endpoints (trading, account info), see example_rest_api.py\n"
    )
    bybit.close()


if __name__ == "__main__":
    """
    Run the public API example.

    Usage:
        python example_public_api.py

    No authentication required - this example only uses public endpoints.
    """
    example_public_api()
