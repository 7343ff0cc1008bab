"""Client configuration.

A :class:`BybitConfig` is built once and shared, read-only, by every request a
client makes. Nothing in the SDK keeps process-wide mutable settings.
"""

from dataclasses import dataclass, field

from bybit_v5.errors import ValidationError
from bybit_v5.signer import Credentials

# ============================================================================
# REST HOSTS
# ============================================================================

MAINNET_API_URL: str = "https://api.bybit.com"
NL_API_URL: str = "https://api.bybit.nl"
HK_API_URL: str = "https://api.byhkbit.com"
TR_API_URL: str = "https://api.bybit-tr.com"
TESTNET_API_URL: str = "https://api-testnet.bybit.com"

DEFAULT_RECV_WINDOW: str = "5000"


@dataclass(frozen=True)
class BybitConfig:
    """Immutable settings consumed by request assembly.

    Attributes:
        api_key: Bybit API key, or None for a public-only client.
        api_secret: Bybit API secret, or None for a public-only client. Never
            shown in ``repr``.
        receive_window: Milliseconds Bybit tolerates between the request
            timestamp and server time, as a decimal string.
        api_url: REST host, switchable per regional deployment.

    """

    api_key: str | None = None
    api_secret: str | None = field(default=None, repr=False)
    receive_window: str = DEFAULT_RECV_WINDOW
    api_url: str = MAINNET_API_URL

    def __post_init__(self) -> None:
        window = self.receive_window
        if not isinstance(window, str) or not window.isdigit():
            raise ValidationError(
                f"receive_window must be a string of digits, got {window!r}"
            )
        if self.api_url.endswith("/"):
            raise ValidationError(f"api_url must not end with '/': {self.api_url}")

    @property
    def credentials(self) -> Credentials:
        return Credentials(api_key=self.api_key, api_secret=self.api_secret)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.api_key and self.api_secret)
