# payprocess/core.py
from dataclasses import dataclass
from enum import Enum
from importlib.metadata import version, PackageNotFoundError
from typing import Any, Dict, Mapping, Optional, Tuple
import logging

from .client import ApiClient
from .exceptions import InvalidSavedStateError, ProcessStateError
from .payment.base import State, _require
from .payment.external import ExternalPaymentProcess, ExternalSavedState
from .payment.money_source import ExternalCard, Wallet
from .payment.wallet import WalletPaymentProcess, WalletSavedState

logger = logging.getLogger(__name__)

try:
    __version__ = version("payprocess")
except PackageNotFoundError:
    __version__ = "unknown"


class PaymentContext(str, Enum):
    WALLET = "wallet"
    EXTERNAL = "external"

    @property
    def ordinal(self) -> int:
        return list(PaymentContext).index(self)


def encode_flags(payment_context: PaymentContext, mutable_payment_context: bool) -> int:
    """Pack the context ordinal (ones digit) and mutability (tens digit)."""
    return payment_context.ordinal + (10 if mutable_payment_context else 0)


def decode_flags(flags: int) -> Tuple[PaymentContext, bool]:
    """Inverse of :func:`encode_flags`.

    Only the ones and tens digits are read, so legacy values such as 100
    decode like 0.

    Raises:
        InvalidSavedStateError: If flags is negative or either digit is out of range
    """
    if isinstance(flags, bool) or not isinstance(flags, int):
        raise InvalidSavedStateError(f"invalid flags: {flags!r}")
    if flags < 0:
        raise InvalidSavedStateError(f"invalid flags: {flags}")

    contexts = list(PaymentContext)
    index = flags % 10
    if index >= len(contexts):
        raise InvalidSavedStateError(f"invalid flags: {flags}")
    mutable = (flags // 10) % 10
    if mutable > 1:
        raise InvalidSavedStateError(f"invalid flags: {flags}")
    return contexts[index], mutable == 1


@dataclass(frozen=True)
class SavedState:
    """Snapshot of a :class:`UnifiedPaymentProcess`.

    Persist it with :meth:`to_record`, a flat record of two opaque strings
    and one small integer, and read it back with :meth:`from_record`.
    """

    wallet_state: WalletSavedState
    external_state: ExternalSavedState
    payment_context: PaymentContext
    mutable_payment_context: bool = True

    @classmethod
    def from_flags(
        cls,
        wallet_state: WalletSavedState,
        external_state: ExternalSavedState,
        flags: int,
    ) -> "SavedState":
        payment_context, mutable = decode_flags(flags)
        return cls(wallet_state, external_state, payment_context, mutable)

    @property
    def flags(self) -> int:
        return encode_flags(self.payment_context, self.mutable_payment_context)

    def to_record(self) -> Dict[str, Any]:
        return {
            "wallet": self.wallet_state.to_json(),
            "external": self.external_state.to_json(),
            "flags": self.flags,
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "SavedState":
        if not isinstance(record, Mapping):
            raise InvalidSavedStateError(f"saved state record must be a mapping, got {type(record).__name__}")
        missing = {"wallet", "external", "flags"} - set(record)
        if missing:
            raise InvalidSavedStateError(f"saved state record misses {sorted(missing)}")
        for key in ("wallet", "external"):
            if not isinstance(record[key], (str, bytes)):
                raise InvalidSavedStateError(f"saved state record field {key!r} must be a string")

        return cls.from_flags(
            WalletSavedState.from_json(record["wallet"]),
            ExternalSavedState.from_json(record["external"]),
            record["flags"],
        )


class UnifiedPaymentProcess:
    """
    One payment that can be paid either from the wallet or from an external
    instrument.

    Holds a :class:`WalletPaymentProcess` and an :class:`ExternalPaymentProcess`
    and forwards every call to the one selected by :attr:`payment_context`.
    The selector starts as WALLET for an authorized client and EXTERNAL
    otherwise. While it is mutable and the active process is STARTED, each
    proceed() re-reads the money source and switches if it belongs to the
    other process. Once PROCESSING the payment stays with its process even
    if the money source changes afterwards.
    """

    def __init__(self, client: ApiClient, parameter_provider, instance_id: Optional[str] = None):
        if client is None:
            raise ValueError("client is required")
        self.client = client
        self.parameter_provider = parameter_provider
        self.wallet_process = WalletPaymentProcess(client, parameter_provider)
        self.external_process = ExternalPaymentProcess(
            client, parameter_provider, instance_id=instance_id
        )
        self._mutable_payment_context = True
        self._payment_context = self._derive_payment_context()
        logger.debug(f"[UnifiedPaymentProcess] created with context={self._payment_context.value}")

    @property
    def payment_context(self) -> PaymentContext:
        return self._payment_context

    @property
    def mutable_payment_context(self) -> bool:
        return self._mutable_payment_context

    @property
    def state(self) -> State:
        return self._active().state

    @property
    def retry_delay(self) -> float:
        return self._active().retry_delay

    @property
    def auth_uri(self) -> Optional[str]:
        if self._payment_context == PaymentContext.EXTERNAL:
            return self.external_process.auth_uri
        return None

    @property
    def auth_params(self) -> Optional[Dict[str, str]]:
        if self._payment_context == PaymentContext.EXTERNAL:
            return self.external_process.auth_params
        return None

    def is_completed(self) -> bool:
        return self._active().is_completed()

    def init_with_fixed_payment_context(self, payment_context: PaymentContext) -> "UnifiedPaymentProcess":
        """Pin the payment context. Only allowed once, right after creation.

        Returns:
            self, for chaining with the constructor

        Raises:
            ProcessStateError: If a transition already happened or the context is already fixed
        """
        if self.state != State.CREATED:
            raise ProcessStateError(
                "init_with_fixed_payment_context() must be called before proceed()",
                self.state,
            )
        if not self._mutable_payment_context:
            raise ProcessStateError("payment context is already fixed", self.state)
        self._payment_context = PaymentContext(payment_context)
        self._mutable_payment_context = False
        logger.debug(f"[UnifiedPaymentProcess] context fixed to {self._payment_context.value}")
        return self

    def proceed(self) -> bool:
        self._switch_context_if_required()
        return self._active().proceed()

    def repeat(self) -> bool:
        return self._active().repeat()

    def reset(self) -> None:
        """Reset both processes and re-read authorization.

        The selector is re-derived even when it was pinned, and it stays
        immutable, so a pinned payment may come back in the other context.
        """
        self.wallet_process.reset()
        self.external_process.reset()
        self._payment_context = self._derive_payment_context()

    def get_request_payment(self):
        return self._active().get_request_payment()

    def get_process_payment(self):
        return self._active().get_process_payment()

    def set_access_token(self, access_token: Optional[str]) -> None:
        self.client.set_access_token(access_token)
        self._payment_context = self._derive_payment_context()

    def set_instance_id(self, instance_id: Optional[str]) -> None:
        self.external_process.set_instance_id(instance_id)

    def get_saved_state(self) -> SavedState:
        return SavedState(
            wallet_state=self.wallet_process.get_saved_state(),
            external_state=self.external_process.get_saved_state(),
            payment_context=self._payment_context,
            mutable_payment_context=self._mutable_payment_context,
        )

    def restore_saved_state(self, saved_state: SavedState) -> None:
        if not isinstance(saved_state, SavedState):
            raise InvalidSavedStateError(
                f"expected SavedState, got {type(saved_state).__name__}"
            )
        # validate both before touching either process
        if not isinstance(saved_state.wallet_state, WalletSavedState):
            raise InvalidSavedStateError("wallet_state must be WalletSavedState")
        if not isinstance(saved_state.external_state, ExternalSavedState):
            raise InvalidSavedStateError("external_state must be ExternalSavedState")

        self.wallet_process.restore_saved_state(saved_state.wallet_state)
        self.external_process.restore_saved_state(saved_state.external_state)
        self._payment_context = PaymentContext(saved_state.payment_context)
        self._mutable_payment_context = saved_state.mutable_payment_context
        logger.debug(
            f"[UnifiedPaymentProcess] restored context={self._payment_context.value} "
            f"mutable={self._mutable_payment_context} state={self.state.value}"
        )

    def _active(self):
        if self._payment_context == PaymentContext.WALLET:
            return self.wallet_process
        return self.external_process

    def _derive_payment_context(self) -> PaymentContext:
        if self.client.is_authorized():
            return PaymentContext.WALLET
        return PaymentContext.EXTERNAL

    def _switch_context_if_required(self) -> None:
        if self.state != State.STARTED or not self._mutable_payment_context:
            return

        money_source = _require("money_source", self.parameter_provider.get_money_source())
        if self._payment_context == PaymentContext.WALLET and isinstance(money_source, ExternalCard):
            self._payment_context = PaymentContext.EXTERNAL
        elif self._payment_context == PaymentContext.EXTERNAL and isinstance(money_source, Wallet):
            self._payment_context = PaymentContext.WALLET
        else:
            return
        logger.info(f"[UnifiedPaymentProcess] switched context to {self._payment_context.value}")
