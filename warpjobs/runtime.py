"""Execution environment of the contracts: messages, responses, dependencies."""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable

from .errors import StdError


def _plain(value: Any) -> Any:
    """Convert a value into plain JSON data."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, dict):
        return {str(key): _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    to_json = getattr(value, "to_json", None)
    if callable(to_json):
        return _plain(to_json())
    return value


def to_json_string(value: Any) -> str:
    """Serialize a value to compact JSON text."""
    return json.dumps(_plain(value), separators=(",", ":"), ensure_ascii=False)


def to_binary(value: Any) -> bytes:
    """Serialize a value to JSON bytes."""
    return to_json_string(value).encode("utf-8")


def _display(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


@dataclass(frozen=True)
class Coin:
    """An amount of a native token."""

    denom: str
    amount: int

    def to_json(self) -> dict:
        return {"denom": self.denom, "amount": str(self.amount)}

    @classmethod
    def from_json(cls, data: dict) -> "Coin":
        return cls(denom=data["denom"], amount=int(data["amount"]))


@dataclass(frozen=True)
class Attribute:
    """A key/value pair attached to a response or an event."""

    key: str
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            object.__setattr__(self, "value", _display(self.value))


@dataclass
class Event:
    """An event emitted by a contract."""

    type: str
    attributes: list[Attribute] = field(default_factory=list)


@dataclass(frozen=True)
class BankSend:
    """Send native tokens to an address."""

    to_address: str
    amount: list[Coin]

    def to_json(self) -> dict:
        return {"bank": {"send": {"to_address": self.to_address, "amount": self.amount}}}


@dataclass(frozen=True)
class WasmExecute:
    """Execute a contract with a JSON message."""

    contract_addr: str
    msg: bytes
    funds: list[Coin] = field(default_factory=list)

    def to_json(self) -> dict:
        return {
            "wasm": {
                "execute": {
                    "contract_addr": self.contract_addr,
                    "msg": self.msg,
                    "funds": self.funds,
                }
            }
        }


@dataclass(frozen=True)
class WasmInstantiate:
    """Instantiate a new contract from stored code."""

    admin: str | None
    code_id: int
    msg: bytes
    funds: list[Coin]
    label: str

    def to_json(self) -> dict:
        return {
            "wasm": {
                "instantiate": {
                    "admin": self.admin,
                    "code_id": self.code_id,
                    "msg": self.msg,
                    "funds": self.funds,
                    "label": self.label,
                }
            }
        }


class ReplyOn(Enum):
    """When the calling contract gets a reply for a sub-message."""

    ALWAYS = "always"
    SUCCESS = "success"
    ERROR = "error"
    NEVER = "never"


@dataclass(frozen=True)
class SubMsg:
    """A message with reply settings."""

    id: int
    msg: Any
    gas_limit: int | None = None
    reply_on: ReplyOn = ReplyOn.NEVER


@dataclass
class Reply:
    """Result of a sub-message, delivered back to the calling contract."""

    id: int
    events: list[Event] = field(default_factory=list)
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass
class Response:
    """What a contract call returns: messages to dispatch and attributes."""

    messages: list[SubMsg] = field(default_factory=list)
    attributes: list[Attribute] = field(default_factory=list)

    def add_attribute(self, key: str, value: Any) -> "Response":
        self.attributes.append(Attribute(key, value))
        return self

    def add_attributes(self, attributes: Iterable[Attribute | tuple[str, Any]]) -> "Response":
        for attribute in attributes:
            if not isinstance(attribute, Attribute):
                attribute = Attribute(*attribute)
            self.attributes.append(attribute)
        return self

    def add_message(self, message: Any) -> "Response":
        self.messages.append(SubMsg(id=0, msg=message, reply_on=ReplyOn.NEVER))
        return self

    def add_messages(self, messages: Iterable[Any]) -> "Response":
        for message in messages:
            self.add_message(message)
        return self

    def add_submessage(self, submessage: SubMsg) -> "Response":
        self.messages.append(submessage)
        return self


@dataclass(frozen=True)
class Env:
    """Block and contract the call runs in."""

    block_height: int
    block_time: int
    chain_id: str
    contract_address: str


@dataclass
class MessageInfo:
    """Sender of a call and the native funds sent with it."""

    sender: str
    funds: list[Coin] = field(default_factory=list)


class Api:
    """Address validation with the rules of the test environment."""

    min_length = 3
    max_length = 90

    def addr_validate(self, address: str) -> str:
        if len(address) < self.min_length:
            raise StdError(
                f"Invalid input: human address too short (must be >= {self.min_length})"
            )
        if len(address) > self.max_length:
            raise StdError(
                f"Invalid input: human address too long (must be <= {self.max_length})"
            )
        if address != address.lower():
            raise StdError("Invalid input: address not normalized")
        return address


class Querier:
    """Answers bank balance and contract queries from registered data."""

    def __init__(self) -> None:
        self._balances: dict[str, dict[str, int]] = {}
        self._contracts: dict[str, Callable[[Any], Any]] = {}

    def set_balance(self, address: str, coins: Iterable[Coin]) -> None:
        self._balances[address] = {coin.denom: coin.amount for coin in coins}

    def register_contract(self, address: str, handler: Callable[[Any], Any]) -> None:
        self._contracts[address] = handler

    def query_balance(self, address: str, denom: str) -> Coin:
        return Coin(denom=denom, amount=self._balances.get(address, {}).get(denom, 0))

    def query_wasm_smart(self, contract_addr: str, msg: Any) -> Any:
        handler = self._contracts.get(contract_addr)
        if handler is None:
            raise StdError(f"Querier system error: No such contract: {contract_addr}")
        if isinstance(msg, (bytes, bytearray)):
            request = json.loads(bytes(msg))
        else:
            request = json.loads(to_json_string(msg))
        return handler(request)


@dataclass
class Deps:
    """Storage, address API and querier available to a contract call."""

    storage: dict = field(default_factory=dict)
    api: Api = field(default_factory=Api)
    querier: Querier = field(default_factory=Querier)


def mock_env() -> Env:
    """Environment used by tests."""
    return Env(
        block_height=12345,
        block_time=1571797419,
        chain_id="cosmos-testnet-14002",
        contract_address="cosmos2contract",
    )


def mock_info(sender: str, funds: Iterable[Coin] | None = None) -> MessageInfo:
    """Message info for a sender and optional funds."""
    return MessageInfo(sender=sender, funds=list(funds or []))


def mock_dependencies() -> Deps:
    """Fresh, empty dependencies."""
    return Deps()