"""
Authenticated REST API Example

This example demonstrates how to use Bybit's authenticated V5 REST endpoints.
These endpoints require valid API credentials and allow you to:

Account Information:
- Get the unified account wallet balance
- Get open positions
- Get open orders

Trading Operations:
- Place limit orders (post-only, far from the market)
- Cancel orders by order id or by client order link id
- Cancel all orders of a symbol

Environment Variables Required:
- BYBIT_API_KEY: Your API key
- BYBIT_API_SECRET: Your API secret
- BYBIT_API_URL: REST host (optional, e.g. https://api-testnet.bybit.com)
- BYBIT_RECV_WINDOW: Receive window in milliseconds (optional)
"""

import logging
import uuid

from bybit_v5 import (
    BybitApiClient,
    Category,
    ExchangeRejected,
    OrderIdVariant,
    Side,
    TimeInForce,
)
from bybit_v5.env_setup import setup_environment
from bybit_v5.helpers import print_data

SYMBOL = "ETHUSDT"


def example_auth_rest_api() -> None:
    """Demonstrate authenticated REST API endpoints for trading and account management."""

    print("=" * 70)
    print("Bybit Authenticated REST API Example")
    print("=" * 70)

    # Load environment variables from .env file
    print("\n[Setup] Loading credentials from environment...")
    config = setup_environment()
    print(f"[Setup] API Endpoint: {config.api_url}\n")

    # Initialize authenticated client
    print("[Setup] Initializing authenticated API client...")
    bybit = BybitApiClient(config=config)
    print("[Setup] Client initialized successfully!\n")

    # ==================================================================
    # PART 1: ACCOUNT INFORMATION
    # ==================================================================
    print("=" * 70)
    print("PART 1: ACCOUNT INFORMATION")
    print("=" * 70)

    account = bybit.get_account_info()
    print(f"\n[Account] {account.account_type}")
    print(f"  Total Equity:    ${account.total_equity}")
    print(f"  Available:       ${account.total_available_balance}")
    print(f"  Perp UPL:        ${account.total_perp_upl}")
    for coin in account.coins:
        print(f"  {coin.coin}: equity {coin.equity} (${coin.usd_value})")

    positions = bybit.get_positions(Category.LINEAR)
    print(f"\n[Positions] {len(positions)} linear positions")
    for position in positions:
        side = position.side.value if position.side else "Flat"
        print(f"  {position.symbol} {side} {position.size} @ {position.avg_price}")

    # ==================================================================
    # PART 2: TRADING
    # ==================================================================
    print("\n" + "=" * 70)
    print("PART 2: TRADING")
    print("=" * 70)

    ticker = bybit.get_ticker(Category.LINEAR, SYMBOL)
    info = bybit.get_instrument_info(Category.LINEAR, SYMBOL)

    # Far below the market so the order rests
    price = round(ticker.bid1_price * 0.8, int(info.price_scale))
    qty = info.lot_size_filter.min_order_qty
    link_id = f"example-{uuid.uuid4().hex[:16]}"

    print(f"\n[Order] Buy {qty} {SYMBOL} @ {price} (post-only)")
    try:
        created = bybit.place_limit_order(
            Category.LINEAR,
            SYMBOL,
            Side.BUY,
            qty=qty,
            price=price,
            time_in_force=TimeInForce.POST_ONLY,
            order_link_id=link_id,
        )
    except ExchangeRejected as e:
        print(f"[Order] Rejected by Bybit: {e}")
        return
    print(f"[Order] Created: {created.order_id}")

    open_orders = bybit.get_open_orders(Category.LINEAR, SYMBOL)
    print(f"\n[Open Orders] {len(open_orders)} orders on {SYMBOL}")
    print_data(open_orders)

    cancelled = bybit.cancel_order(
        Category.LINEAR, SYMBOL, OrderIdVariant.from_order_link_id(link_id)
    )
    print(f"\n[Cancel] Cancelled {cancelled.order_id} by link id")

    remaining = bybit.cancel_all_orders(Category.LINEAR, SYMBOL)
    print(f"[Cancel All] Cancelled {len(remaining)} remaining orders")

    print("\n" + "=" * 70)
    print("Example completed successfully!")
    print("=" * 70)
    bybit.close()


if __name__ == "__main__":
    """
    Run the authenticated REST API example.

    Usage:
        python example_rest_api.py

    Requires BYBIT_API_KEY and BYBIT_API_SECRET in the environment or a .env file.
    """
    logging.basicConfig(level=logging.INFO)
    example_auth_rest_api()
