# payprocess/__init__.py

from .core import (
    PaymentContext,
    SavedState,
    UnifiedPaymentProcess,
    __version__,
    decode_flags,
    encode_flags,
)
from .exceptions import (
    InvalidSavedStateError,
    MissingParameterError,
    PaymentProcessError,
    ProcessStateError,
    UnsupportedMoneySourceError,
)
from .payment import (
    Card,
    ExternalCard,
    ExternalPaymentProcess,
    MoneySource,
    State,
    Status,
    Wallet,
    WalletPaymentProcess,
)
from .state import StateStore, InMemoryStateStore

__all__ = [
    "UnifiedPaymentProcess",
    "PaymentContext",
    "SavedState",
    "encode_flags",
    "decode_flags",
    "WalletPaymentProcess",
    "ExternalPaymentProcess",
    "State",
    "Status",
    "MoneySource",
    "Wallet",
    "Card",
    "ExternalCard",
    "PaymentProcessError",
    "ProcessStateError",
    "InvalidSavedStateError",
    "MissingParameterError",
    "UnsupportedMoneySourceError",
    "StateStore",
    "InMemoryStateStore",
    "__version__",
]

# Conditionally export RedisStateStore if available
try:
    from .state import RedisStateStore
    __all__.append("RedisStateStore")
except ImportError:  # pragma: no cover
    pass
