from bybit_v5.api import BybitApiClient, raise_response_errors
from bybit_v5.config import (
    HK_API_URL,
    MAINNET_API_URL,
    NL_API_URL,
    TESTNET_API_URL,
    TR_API_URL,
    BybitConfig,
)
from bybit_v5.errors import (
    BadGateway,
    BadHttpStatus,
    BadRequest,
    BaseError,
    DeserializationError,
    EmptyList,
    ExchangeError,
    ExchangeRejected,
    Forbidden,
    GatewayTimeout,
    HttpConnectionError,
    InternalServerError,
    InvalidEnvelope,
    InvalidFieldType,
    InvalidNumericString,
    MalformedParameters,
    MissingCredential,
    MissingListField,
    NotFound,
    RateLimited,
    SchemaMismatch,
    ServiceUnavailable,
    TransportError,
    TransportTimeoutError,
    Unauthorized,
    UnknownEnumVariant,
    ValidationError,
)
from bybit_v5.helpers import floor_to_decimals, print_data
from bybit_v5.types import (
    AccountInfo,
    Category,
    CoinInfo,
    ContractInfo,
    CreateOrderResponse,
    Envelope,
    LeverageFilter,
    LotSizeFilter,
    Order,
    OrderIdVariant,
    OrderType,
    PositionInfo,
    PriceFilter,
    RequestKind,
    Side,
    TickerData,
    TimeInForce,
)

__version__ = "0.1.0"


def get_version() -> str:
    return __version__


__all__ = [
    "AccountInfo",
    "BadGateway",
    "BadHttpStatus",
    "BadRequest",
    "BaseError",
    "BybitApiClient",
    "BybitConfig",
    "Category",
    "CoinInfo",
    "ContractInfo",
    "CreateOrderResponse",
    "DeserializationError",
    "EmptyList",
    "Envelope",
    "ExchangeError",
    "ExchangeRejected",
    "Forbidden",
    "GatewayTimeout",
    "HK_API_URL",
    "HttpConnectionError",
    "InternalServerError",
    "InvalidEnvelope",
    "InvalidFieldType",
    "InvalidNumericString",
    "LeverageFilter",
    "LotSizeFilter",
    "MAINNET_API_URL",
    "MalformedParameters",
    "MissingCredential",
    "MissingListField",
    "NL_API_URL",
    "NotFound",
    "Order",
    "OrderIdVariant",
    "OrderType",
    "PositionInfo",
    "PriceFilter",
    "RateLimited",
    "RequestKind",
    "SchemaMismatch",
    "ServiceUnavailable",
    "Side",
    "TESTNET_API_URL",
    "TR_API_URL",
    "TickerData",
    "TimeInForce",
    "TransportError",
    "TransportTimeoutError",
    "Unauthorized",
    "UnknownEnumVariant",
    "ValidationError",
    "floor_to_decimals",
    "get_version",
    "print_data",
    "raise_response_errors",
]
