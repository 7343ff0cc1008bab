"""Type definitions for the Bybit V5 Python SDK.

This module contains type definitions, enums, and dataclasses used throughout
the SDK, organized into logical sections for clarity.

Records use snake_case attributes. The camelCase name Bybit uses on the wire is
declared on each field with :func:`wire`, and the annotation decides how the
value is decoded (see :mod:`bybit_v5.decoder`): ``float`` fields accept the
exchange's quoted, unquoted and null numbers alike, enum fields only accept
their listed literals.
"""

import re
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Self, TypeAlias

from bybit_v5.errors import ExchangeRejected, ValidationError

# ============================================================================
# TYPE ALIASES
# ============================================================================

# JSON type hierarchy
JsonObject: TypeAlias = dict[str, "JsonValue"]
JsonArray: TypeAlias = list["JsonValue"]
JsonValue: TypeAlias = None | bool | int | float | str | JsonObject | JsonArray
Json: TypeAlias = JsonObject

# Request parameters keep insertion order, which is part of the signed payload
Params: TypeAlias = dict[str, Any]

# Bybit input types
BybitNumericInput: TypeAlias = Decimal | str | float | int


# ============================================================================
# NUMERIC CONVERSION UTILITIES
# ============================================================================

DECIMAL_PATTERN = re.compile(r"^\d+(\.\d+)?$")


def numeric_to_str(n: BybitNumericInput) -> str:
    """Convert a numeric input to the plain decimal string Bybit expects."""
    if isinstance(n, str):
        if not DECIMAL_PATTERN.match(n):
            raise ValidationError(f"Invalid numeric input {n}")
        return n
    if isinstance(n, bool):
        raise ValidationError(f"Invalid numeric input type {n} - {type(n)}")
    if isinstance(n, (int, float)):
        n = Decimal(str(n))
    if not isinstance(n, Decimal):
        raise ValidationError(f"Invalid numeric input type {n} - {type(n)}")
    if not n.is_finite() or n < 0:
        raise ValidationError(f"Invalid numeric input {n}")
    return format(n, "f")


def wire(name: str, **kwargs: Any) -> Any:
    """Declare the wire name of a record field.

    Extra keyword arguments are passed to :func:`dataclasses.field`, so optional
    fields are written ``wire("indexPrice", default=None)``.
    """
    return field(metadata={"wire": name}, **kwargs)


# ============================================================================
# CORE ENUMS
# ============================================================================


class RequestKind(Enum):
    """Whether a request carries its parameters in a JSON body or a query string."""

    WRITE = "write"
    READ = "read"


class Category(Enum):
    """Product category."""

    SPOT = "spot"
    LINEAR = "linear"
    INVERSE = "inverse"
    OPTION = "option"


class Side(Enum):
    """Order side."""

    BUY = "Buy"
    SELL = "Sell"


class OrderType(Enum):
    """Order type."""

    MARKET = "Market"
    LIMIT = "Limit"


class TimeInForce(Enum):
    """Time in force.

    See https://bybit-exchange.github.io/docs/v5/enum#timeinforce
    """

    GTC = "GTC"
    IOC = "IOC"
    FOK = "FOK"
    POST_ONLY = "PostOnly"


# ============================================================================
# ORDER CONFIGURATION TYPES
# ============================================================================


@dataclass
class OrderIdVariant:
    """Identifies an order by exchange order id or by client order link id."""

    order_id: str | None
    order_link_id: str | None

    @classmethod
    def from_order_id(cls, order_id: str) -> Self:
        """Create an OrderIdVariant from an exchange assigned order id.

        Raises:
            ValueError: If order_id is None or empty.

        """
        if not order_id:
            raise ValueError("order_id cannot be empty")
        return cls(order_id=order_id, order_link_id=None)

    @classmethod
    def from_order_link_id(cls, order_link_id: str) -> Self:
        """Create an OrderIdVariant from a client order link id.

        Raises:
            ValueError: If order_link_id is None or empty.

        """
        if not order_link_id:
            raise ValueError("order_link_id cannot be empty")
        return cls(order_id=None, order_link_id=order_link_id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the single request parameter that selects the order.

        Raises:
            ValueError: If both order_id and order_link_id are None.

        """
        if self.order_id is not None:
            return {"orderId": self.order_id}
        elif self.order_link_id is not None:
            return {"orderLinkId": self.order_link_id}
        raise ValueError("Empty OrderIdVariant: no order_id or order_link_id set")


# ============================================================================
# RESPONSE ENVELOPE
# ============================================================================


@dataclass
class Envelope:
    """The uniform outer wrapper of every Bybit V5 REST response.

    ``result`` must not be interpreted before :meth:`raise_for_code` has passed.
    """

    ret_code: int
    ret_msg: str
    result: JsonValue
    ret_ext_info: JsonValue = field(default_factory=dict)
    time: int | None = None

    @property
    def ok(self) -> bool:
        return self.ret_code == 0

    def raise_for_code(self) -> None:
        """Raise ExchangeRejected carrying Bybit's code and message if not ok."""
        if self.ret_code != 0:
            raise ExchangeRejected(self.ret_code, self.ret_msg)


# ============================================================================
# ORDER TYPES
# ============================================================================


@dataclass
class CreateOrderResponse:
    """Result of create, cancel and each entry of cancel-all."""

    order_id: str = wire("orderId")
    order_link_id: str = wire("orderLinkId")


@dataclass
class Order:
    """An order as returned by ``/v5/order/realtime``."""

    avg_price: str = wire("avgPrice")
    block_trade_id: str = wire("blockTradeId")
    cancel_type: str = wire("cancelType")
    close_on_trigger: bool = wire("closeOnTrigger")
    create_type: str = wire("createType")
    created_time: str = wire("createdTime")
    cum_exec_fee: float = wire("cumExecFee")
    cum_exec_qty: float = wire("cumExecQty")
    cum_exec_value: float = wire("cumExecValue")
    is_leverage: str = wire("isLeverage")
    last_price_on_created: str = wire("lastPriceOnCreated")
    leaves_qty: str = wire("leavesQty")
    leaves_value: str = wire("leavesValue")
    market_unit: str = wire("marketUnit")
    order_id: str = wire("orderId")
    order_iv: str = wire("orderIv")
    order_link_id: str = wire("orderLinkId")
    order_status: str = wire("orderStatus")
    order_type: OrderType = wire("orderType")
    place_type: str = wire("placeType")
    position_idx: int = wire("positionIdx")
    price: float = wire("price")
    qty: float = wire("qty")
    reduce_only: bool = wire("reduceOnly")
    reject_reason: str = wire("rejectReason")
    side: Side = wire("side")
    sl_limit_price: str = wire("slLimitPrice")
    sl_trigger_by: str = wire("slTriggerBy")
    smp_group: int = wire("smpGroup")
    smp_order_id: str = wire("smpOrderId")
    smp_type: str = wire("smpType")
    stop_loss: str = wire("stopLoss")
    stop_order_type: str = wire("stopOrderType")
    symbol: str = wire("symbol")
    take_profit: str = wire("takeProfit")
    time_in_force: str = wire("timeInForce")
    tp_limit_price: str = wire("tpLimitPrice")
    tp_trigger_by: str = wire("tpTriggerBy")
    tpsl_mode: str = wire("tpslMode")
    trigger_by: str = wire("triggerBy")
    trigger_direction: int = wire("triggerDirection")
    trigger_price: str = wire("triggerPrice")
    updated_time: str = wire("updatedTime")


# ============================================================================
# ACCOUNT TYPES
# ============================================================================


@dataclass
class CoinInfo:
    """Per-coin balance inside a wallet balance entry."""

    coin: str = wire("coin")
    equity: float = wire("equity")
    usd_value: float = wire("usdValue")
    wallet_balance: float = wire("walletBalance")
    locked: float = wire("locked")
    borrow_amount: float = wire("borrowAmount")
    accrued_interest: float = wire("accruedInterest")
    total_order_im: float = wire("totalOrderIM")
    total_position_im: float = wire("totalPositionIM")
    total_position_mm: float = wire("totalPositionMM")
    unrealised_pnl: float = wire("unrealisedPnl")
    cum_realised_pnl: float = wire("cumRealisedPnl")
    bonus: float = wire("bonus")
    collateral_switch: bool = wire("collateralSwitch")
    margin_collateral: bool = wire("marginCollateral")


@dataclass
class AccountInfo:
    """One entry of ``/v5/account/wallet-balance``."""

    account_type: str = wire("accountType")
    account_im_rate: float = wire("accountIMRate")
    account_mm_rate: float = wire("accountMMRate")
    account_ltv: float = wire("accountLTV")
    total_equity: float = wire("totalEquity")
    total_wallet_balance: float = wire("totalWalletBalance")
    total_margin_balance: float = wire("totalMarginBalance")
    total_available_balance: float = wire("totalAvailableBalance")
    total_perp_upl: float = wire("totalPerpUPL")
    total_initial_margin: float = wire("totalInitialMargin")
    total_maintenance_margin: float = wire("totalMaintenanceMargin")
    coins: list[CoinInfo] = wire("coin")


@dataclass
class PositionInfo:
    """One entry of ``/v5/position/list``.

    ``side`` is None for an empty one-way position, which Bybit sends as ``""``.
    """

    position_idx: int = wire("positionIdx")
    risk_id: int = wire("riskId")
    risk_limit_value: float = wire("riskLimitValue")
    symbol: str = wire("symbol")
    side: Side | None = wire("side")
    size: float = wire("size")
    avg_price: float = wire("avgPrice")
    position_value: float = wire("positionValue")
    trade_mode: int = wire("tradeMode")
    auto_add_margin: int = wire("autoAddMargin")
    position_status: str = wire("positionStatus")
    leverage: float = wire("leverage")
    mark_price: float = wire("markPrice")
    position_im: float = wire("positionIM")
    position_mm: float = wire("positionMM")
    take_profit: float = wire("takeProfit")
    stop_loss: float = wire("stopLoss")
    trailing_stop: float = wire("trailingStop")
    unrealised_pnl: float = wire("unrealisedPnl")
    cur_realised_pnl: float = wire("curRealisedPnl")
    cum_realised_pnl: float = wire("cumRealisedPnl")
    adl_rank_indicator: int = wire("adlRankIndicator")
    tpsl_mode: str = wire("tpslMode")
    created_time: str = wire("createdTime")
    updated_time: str = wire("updatedTime")


# ============================================================================
# MARKET TYPES
# ============================================================================


@dataclass
class TickerData:
    """One entry of ``/v5/market/tickers``.

    Derivative-only fields are None when the category does not carry them.
    """

    symbol: str = wire("symbol")
    last_price: float = wire("lastPrice")
    prev_price_24h: float = wire("prevPrice24h")
    price_24h_pcnt: float = wire("price24hPcnt")
    high_price_24h: float = wire("highPrice24h")
    low_price_24h: float = wire("lowPrice24h")
    turnover_24h: float = wire("turnover24h")
    volume_24h: float = wire("volume24h")
    bid1_price: float = wire("bid1Price")
    bid1_size: float = wire("bid1Size")
    ask1_price: float = wire("ask1Price")
    ask1_size: float = wire("ask1Size")
    index_price: float | None = wire("indexPrice", default=None)
    mark_price: float | None = wire("markPrice", default=None)
    prev_price_1h: float | None = wire("prevPrice1h", default=None)
    open_interest: float | None = wire("openInterest", default=None)
    open_interest_value: float | None = wire("openInterestValue", default=None)
    funding_rate: float | None = wire("fundingRate", default=None)
    next_funding_time: str | None = wire("nextFundingTime", default=None)


@dataclass
class LeverageFilter:
    """Leverage limits of a contract."""

    min_leverage: float = wire("minLeverage")
    max_leverage: float = wire("maxLeverage")
    leverage_step: float = wire("leverageStep")


@dataclass
class PriceFilter:
    """Price limits of a contract."""

    min_price: float = wire("minPrice")
    max_price: float = wire("maxPrice")
    tick_size: float = wire("tickSize")


@dataclass
class LotSizeFilter:
    """Quantity limits of a contract."""

    max_order_qty: float = wire("maxOrderQty")
    min_order_qty: float = wire("minOrderQty")
    qty_step: float = wire("qtyStep")
    post_only_max_order_qty: float | None = wire("postOnlyMaxOrderQty", default=None)
    max_mkt_order_qty: float | None = wire("maxMktOrderQty", default=None)
    min_notional_value: float | None = wire("minNotionalValue", default=None)


@dataclass
class ContractInfo:
    """One derivatives entry of ``/v5/market/instruments-info``."""

    symbol: str = wire("symbol")
    contract_type: str = wire("contractType")
    status: str = wire("status")
    base_coin: str = wire("baseCoin")
    quote_coin: str = wire("quoteCoin")
    settle_coin: str = wire("settleCoin")
    launch_time: str = wire("launchTime")
    delivery_time: str = wire("deliveryTime")
    delivery_fee_rate: str = wire("deliveryFeeRate")
    price_scale: float = wire("priceScale")
    leverage_filter: LeverageFilter = wire("leverageFilter")
    price_filter: PriceFilter = wire("priceFilter")
    lot_size_filter: LotSizeFilter = wire("lotSizeFilter")
    unified_margin_trade: bool = wire("unifiedMarginTrade")
    funding_interval: int = wire("fundingInterval")
