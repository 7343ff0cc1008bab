"""HTTP API client for the Bybit V5 REST API.

This module provides the main BybitApiClient class for placing and cancelling
orders and querying account and market state.
"""

import logging
from typing import Any, Callable, TypeVar

import orjson

from bybit_v5.config import DEFAULT_RECV_WINDOW, MAINNET_API_URL, BybitConfig
from bybit_v5.decoder import decode_first, decode_list, decode_result
from bybit_v5.errors import (
    BadGateway,
    BadHttpStatus,
    BadRequest,
    ExchangeRejected,
    Forbidden,
    GatewayTimeout,
    InternalServerError,
    NotFound,
    RateLimited,
    ServiceUnavailable,
    Unauthorized,
    ValidationError,
)
from bybit_v5.executors import DEFAULT_HTTP_EXECUTOR, HttpExecutor
from bybit_v5.executors.interface import HttpResponse
from bybit_v5.request import SignedRequest, assemble_public_request, assemble_request
from bybit_v5.signer import Signer
from bybit_v5.types import (
    AccountInfo,
    BybitNumericInput,
    Category,
    ContractInfo,
    CreateOrderResponse,
    Order,
    OrderIdVariant,
    OrderType,
    Params,
    PositionInfo,
    RequestKind,
    Side,
    TickerData,
    TimeInForce,
    numeric_to_str,
)

log = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

RATE_LIMIT_RESET_HEADER = "x-bapi-limit-reset-timestamp"


def _error_message(body: bytes) -> str:
    """Extract ``[retCode] retMsg`` from an error body, or fall back to its text."""
    try:
        data = orjson.loads(body)
    except orjson.JSONDecodeError:
        data = None

    if isinstance(data, dict):
        code = data.get("retCode")
        message = data.get("retMsg")
        if code is not None and message is not None:
            return f"[{code}] {message}"
        return str(data)

    text = body.decode("utf-8", errors="replace").strip()
    return text[:200] if text else "<no error message>"


def raise_response_errors(response: HttpResponse) -> None:
    """Check HTTP response status and raise appropriate errors.

    Bybit reports business errors with HTTP 200 and a nonzero ``retCode``; those
    are handled by the decoder. This function only deals with non-2XX statuses,
    which Bybit uses for gateway level failures such as IP bans or rate limits.

    Args:
        response: The HTTP response to validate

    Raises:
        BadRequest: For 400 status codes
        Unauthorized: For 401 status codes
        Forbidden: For 403 status codes
        NotFound: For 404 status codes
        RateLimited: For 429 status codes
        BadHttpStatus: For other 4XX status codes
        InternalServerError: For 500 status codes
        BadGateway: For 502 status codes
        ServiceUnavailable: For 503 status codes
        GatewayTimeout: For 504 status codes

    """
    status = response.status

    # Success status codes (2xx)
    if 200 <= status < 300:
        return

    error_message = _error_message(response.body)

    # 4xx Client Errors
    if status == 400:
        raise BadRequest(status, f"Bad request: {error_message}")

    if status == 401:
        raise Unauthorized(status, f"Unauthorized: {error_message}")

    if status == 403:
        raise Forbidden(status, f"Forbidden: {error_message}")

    if status == 404:
        raise NotFound(status, f"Not found: {error_message}")

    if status == 429:
        reset = next(
            (
                value
                for name, value in (response.headers or {}).items()
                if name.lower() == RATE_LIMIT_RESET_HEADER
            ),
            None,
        )
        message = f"Rate limit exceeded: {error_message}"
        if reset is not None:
            message += f" (resets at {reset})"
        raise RateLimited(status, message)

    # Other 4xx errors
    if 400 <= status < 500:
        raise BadHttpStatus(status, f"Client error ({status}): {error_message}")

    # 5xx Server Errors
    if status == 500:
        raise InternalServerError(status, f"Internal server error: {error_message}")

    if status == 502:
        raise BadGateway(status, f"Bad gateway: {error_message}")

    if status == 503:
        raise ServiceUnavailable(status, f"Service unavailable: {error_message}")

    if status == 504:
        raise GatewayTimeout(status, f"Gateway timeout: {error_message}")

    # Other 5xx errors
    if 500 <= status < 600:
        raise InternalServerError(status, f"Server error ({status}): {error_message}")

    raise BadHttpStatus(status, f"Unexpected status code ({status}): {error_message}")


class BybitApiClient:
    """Bybit V5 API client for trading operations.

    Examples:
        .. code-block:: python

            from bybit_v5 import BybitApiClient, Category, Side

            bybit = BybitApiClient(api_key="...", api_secret="...")

            order = bybit.place_limit_order(
                Category.LINEAR, "ETHUSDT", Side.BUY, qty="0.1", price="3000.21"
            )
            print(order.order_id)

            account = bybit.get_account_info()
            print(f"Total equity: {account.total_equity}")
    """

    _config: BybitConfig
    _signer: Signer
    _http_executor: HttpExecutor

    def __init__(
        self,
        api_key: str | None = None,
        api_secret: str | None = None,
        receive_window: str = DEFAULT_RECV_WINDOW,
        api_url: str = MAINNET_API_URL,
        executor: HttpExecutor | None = None,
        config: BybitConfig | None = None,
    ):
        """Initialize the Bybit API client.

        Args:
            api_key: Your API key. Leave unset for a public-only client.
            api_secret: Your API secret. Leave unset for a public-only client.
            receive_window: Receive window in milliseconds (default: "5000")
            api_url: REST host (default: mainnet). See :mod:`bybit_v5.config`
                for regional hosts.
            executor: Custom HTTP executor (optional, uses default if not provided)
            config: A complete configuration. When given, the credential, window
                and host arguments are ignored.

        """
        if config is None:
            config = BybitConfig(
                api_key=api_key,
                api_secret=api_secret,
                receive_window=receive_window,
                api_url=api_url,
            )
        self._config = config
        self._signer = Signer(config.credentials, config.receive_window)
        self._http_executor = (
            executor if executor is not None else DEFAULT_HTTP_EXECUTOR()
        )

    @property
    def config(self) -> BybitConfig:
        return self._config

    ############################################################################
    ## Trade API endpoints, api_key and api_secret must be set

    def place_order(
        self,
        category: Category,
        symbol: str,
        side: Side,
        order_type: OrderType,
        qty: BybitNumericInput,
        price: BybitNumericInput | None = None,
        time_in_force: TimeInForce | None = None,
        order_link_id: str | None = None,
        reduce_only: bool | None = None,
    ) -> CreateOrderResponse:
        """Place an order.

        Args:
            category: Product category (e.g. ``Category.LINEAR``)
            symbol: Symbol name (e.g. "ETHUSDT")
            side: ``Side.BUY`` or ``Side.SELL``
            order_type: ``OrderType.MARKET`` or ``OrderType.LIMIT``
            qty: Order quantity
            price: Order price, required for limit orders
            time_in_force: Time in force (optional)
            order_link_id: Client order id, max 36 characters (optional)
            reduce_only: Only reduce an existing position (optional)

        Returns:
            CreateOrderResponse: The exchange order id and the order link id

        Raises:
            ValidationError: If a limit order has no price
            MissingCredential: If the client has no API key or secret
            ExchangeRejected: If Bybit rejects the order

        Endpoint:
            POST /v5/order/create

        """
        if order_type is OrderType.LIMIT and price is None:
            raise ValidationError("price is required for limit orders")

        params: Params = {
            "category": category,
            "symbol": symbol,
            "side": side,
            "orderType": order_type,
            "qty": numeric_to_str(qty),
        }
        if price is not None:
            params["price"] = numeric_to_str(price)
        if time_in_force is not None:
            params["timeInForce"] = time_in_force
        if order_link_id is not None:
            params["orderLinkId"] = order_link_id
        if reduce_only is not None:
            params["reduceOnly"] = reduce_only

        response = self.__send_signed("/v5/order/create", RequestKind.WRITE, params)
        return self.__decode(decode_result, response, CreateOrderResponse)

    def place_limit_order(
        self,
        category: Category,
        symbol: str,
        side: Side,
        qty: BybitNumericInput,
        price: BybitNumericInput,
        time_in_force: TimeInForce = TimeInForce.GTC,
        order_link_id: str | None = None,
        reduce_only: bool | None = None,
    ) -> CreateOrderResponse:
        """Place a limit order. See :meth:`place_order`."""
        return self.place_order(
            category,
            symbol,
            side,
            OrderType.LIMIT,
            qty,
            price=price,
            time_in_force=time_in_force,
            order_link_id=order_link_id,
            reduce_only=reduce_only,
        )

    def place_market_order(
        self,
        category: Category,
        symbol: str,
        side: Side,
        qty: BybitNumericInput,
        order_link_id: str | None = None,
        reduce_only: bool | None = None,
    ) -> CreateOrderResponse:
        """Place a market order. See :meth:`place_order`."""
        return self.place_order(
            category,
            symbol,
            side,
            OrderType.MARKET,
            qty,
            order_link_id=order_link_id,
            reduce_only=reduce_only,
        )

    def cancel_order(
        self, category: Category, symbol: str, order_id: OrderIdVariant
    ) -> CreateOrderResponse:
        """Cancel an open order.

        Args:
            category: Product category
            symbol: Symbol name
            order_id: Either the exchange order id or the client order link id

        Returns:
            CreateOrderResponse: Ids of the cancelled order

        Example:
            .. code-block:: python

                client.cancel_order(
                    Category.LINEAR, "ETHUSDT", OrderIdVariant.from_order_id("c6f0...")
                )

        Endpoint:
            POST /v5/order/cancel

        """
        params: Params = {"category": category, "symbol": symbol}
        params.update(order_id.to_dict())
        response = self.__send_signed("/v5/order/cancel", RequestKind.WRITE, params)
        return self.__decode(decode_result, response, CreateOrderResponse)

    def cancel_all_orders(
        self, category: Category, symbol: str
    ) -> list[CreateOrderResponse]:
        """Cancel all open orders of a symbol.

        Returns:
            list[CreateOrderResponse]: Ids of every cancelled order

        Endpoint:
            POST /v5/order/cancel-all

        """
        params: Params = {"category": category, "symbol": symbol}
        response = self.__send_signed(
            "/v5/order/cancel-all", RequestKind.WRITE, params
        )
        return self.__decode(decode_list, response, CreateOrderResponse)

    def get_open_orders(self, category: Category, symbol: str) -> list[Order]:
        """Get open and recently closed orders of a symbol.

        Returns:
            list[Order]: Orders, possibly empty

        Endpoint:
            GET /v5/order/realtime

        """
        params: Params = {"category": category, "symbol": symbol}
        response = self.__send_signed("/v5/order/realtime", RequestKind.READ, params)
        return self.__decode(decode_list, response, Order)

    def get_account_info(self, account_type: str = "UNIFIED") -> AccountInfo:
        """Get the wallet balance of one account type.

        Args:
            account_type: ``UNIFIED`` (default) or ``CONTRACT``

        Returns:
            AccountInfo: Account level totals with a per-coin breakdown

        Raises:
            EmptyList: If Bybit returns no entry for the account type

        Endpoint:
            GET /v5/account/wallet-balance

        """
        params: Params = {"accountType": account_type}
        response = self.__send_signed(
            "/v5/account/wallet-balance", RequestKind.READ, params
        )
        return self.__decode(decode_first, response, AccountInfo)

    def get_positions(
        self, category: Category, symbol: str | None = None
    ) -> list[PositionInfo]:
        """Get positions, optionally for a single symbol.

        Bybit requires ``settleCoin`` when no symbol is given; USDT is used.

        Endpoint:
            GET /v5/position/list

        """
        params: Params = {"category": category}
        if symbol is not None:
            params["symbol"] = symbol
        else:
            params["settleCoin"] = "USDT"
        response = self.__send_signed("/v5/position/list", RequestKind.READ, params)
        return self.__decode(decode_list, response, PositionInfo)

    ############################################################################
    ## Market API endpoints, can be called without credentials

    def get_ticker(self, category: Category, symbol: str) -> TickerData:
        """Get the latest ticker of a symbol.

        Endpoint:
            GET /v5/market/tickers

        """
        params: Params = {"category": category, "symbol": symbol}
        response = self.__send_public("/v5/market/tickers", params)
        return self.__decode(decode_first, response, TickerData)

    def get_instrument_info(self, category: Category, symbol: str) -> ContractInfo:
        """Get the contract specification of a derivatives symbol.

        Returns:
            ContractInfo: Contract metadata with leverage, price and lot size filters

        Endpoint:
            GET /v5/market/instruments-info

        """
        if category not in (Category.LINEAR, Category.INVERSE):
            raise ValidationError(
                f"instrument info is only decoded for derivatives, got {category.value}"
            )
        params: Params = {"category": category, "symbol": symbol}
        response = self.__send_public("/v5/market/instruments-info", params)
        return self.__decode(decode_first, response, ContractInfo)

    def close(self) -> None:
        """Close the underlying HTTP executor."""
        self._http_executor.close()

    """ Deferred helpers """

    def __send_signed(
        self, path: str, kind: RequestKind, params: dict[str, Any]
    ) -> HttpResponse:
        """Sign and send a request, then check its HTTP status.

        Raises:
            MissingCredential: If the client has no API key or secret.
            BadHttpStatus: If the HTTP status is not 2XX.

        """
        request = assemble_request(self._config, self._signer, path, kind, params)
        return self.__send(request)

    def __send_public(self, path: str, params: dict[str, Any]) -> HttpResponse:
        """Send an unsigned GET request, then check its HTTP status."""
        request = assemble_public_request(self._config, path, params)
        return self.__send(request)

    def __send(self, request: SignedRequest) -> HttpResponse:
        log.debug("%s %s", request.method, request.url)
        response = self._http_executor.send(
            request.method, request.url, request.headers, request.body
        )
        log.debug("%s %s -> %d", request.method, request.url, response.status)
        raise_response_errors(response)
        return response

    def __decode(
        self,
        decode: Callable[[bytes, type[T]], R],
        response: HttpResponse,
        record_cls: type[T],
    ) -> R:
        try:
            return decode(response.body, record_cls)
        except ExchangeRejected as e:
            log.debug(
                "Bybit rejected request: retCode=%d retMsg=%s", e.code, e.message
            )
            raise
