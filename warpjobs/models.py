"""Data types stored and exchanged by the controller and account contracts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from .errors import DeserializationError
from .runtime import Coin


class JobStatus(Enum):
    PENDING = "pending"
    EXECUTED = "executed"
    FAILED = "failed"
    CANCELLED = "cancelled"
    EVICTED = "evicted"


@dataclass
class Config:
    """Controller configuration."""

    owner: str
    fee_collector: str
    warp_account_code_id: int
    minimum_reward: int
    creation_fee_percentage: int
    cancellation_fee_percentage: int
    t_max: int
    t_min: int
    a_max: int
    a_min: int
    q_max: int

    def to_json(self) -> dict:
        return {
            "owner": self.owner,
            "fee_collector": self.fee_collector,
            "warp_account_code_id": str(self.warp_account_code_id),
            "minimum_reward": str(self.minimum_reward),
            "creation_fee_percentage": str(self.creation_fee_percentage),
            "cancellation_fee_percentage": str(self.cancellation_fee_percentage),
            "t_max": str(self.t_max),
            "t_min": str(self.t_min),
            "a_max": str(self.a_max),
            "a_min": str(self.a_min),
            "q_max": str(self.q_max),
        }


@dataclass
class State:
    """Controller counters: next job id and number of queued jobs."""

    current_job_id: int
    current_template_id: int
    q: int

    def to_json(self) -> dict:
        return {
            "current_job_id": str(self.current_job_id),
            "current_template_id": str(self.current_template_id),
            "q": str(self.q),
        }


@dataclass(frozen=True)
class NativeAsset:
    denom: str

    def to_json(self) -> dict:
        return {"native": self.denom}


@dataclass(frozen=True)
class Cw20Asset:
    addr: str

    def to_json(self) -> dict:
        return {"cw20": self.addr}


@dataclass(frozen=True)
class Cw721Asset:
    addr: str
    token_id: str

    def to_json(self) -> dict:
        return {"cw721": [self.addr, self.token_id]}


AssetInfo = Union[NativeAsset, Cw20Asset, Cw721Asset]


@dataclass(frozen=True)
class Job:
    """A scheduled job: a condition, messages to run and a reward."""

    id: int
    owner: str
    last_update_time: int
    name: str
    reward: int
    status: JobStatus = JobStatus.PENDING
    description: str = ""
    labels: list[str] = field(default_factory=list)
    condition: Any = None
    msgs: list[str] = field(default_factory=list)
    vars: list[Any] = field(default_factory=list)
    recurring: bool = False
    requeue_on_evict: bool = False
    assets_to_withdraw: list[AssetInfo] = field(default_factory=list)

    def to_json(self) -> dict:
        return {
            "id": str(self.id),
            "owner": self.owner,
            "last_update_time": str(self.last_update_time),
            "name": self.name,
            "description": self.description,
            "labels": list(self.labels),
            "status": self.status.value,
            "condition": self.condition,
            "msgs": list(self.msgs),
            "vars": list(self.vars),
            "recurring": self.recurring,
            "requeue_on_evict": self.requeue_on_evict,
            "reward": str(self.reward),
            "assets_to_withdraw": [asset.to_json() for asset in self.assets_to_withdraw],
        }


@dataclass(frozen=True)
class Account:
    """A user's warp account contract."""

    owner: str
    account: str

    def to_json(self) -> dict:
        return {"owner": self.owner, "account": self.account}


@dataclass(frozen=True)
class AccountConfig:
    """Configuration of a warp account contract."""

    owner: str
    warp_addr: str

    def to_json(self) -> dict:
        return {"owner": self.owner, "warp_addr": self.warp_addr}


@dataclass(frozen=True)
class Cw20Fund:
    contract_addr: str
    amount: int

    def to_json(self) -> dict:
        return {"cw20": {"contract_addr": self.contract_addr, "amount": str(self.amount)}}


@dataclass(frozen=True)
class Cw721Fund:
    contract_addr: str
    token_id: str

    def to_json(self) -> dict:
        return {"cw721": {"contract_addr": self.contract_addr, "token_id": self.token_id}}


Fund = Union[Cw20Fund, Cw721Fund]


def fund_from_json(data: Any) -> Fund:
    """Decode a fund from its tagged JSON form."""
    try:
        if "cw20" in data:
            body = data["cw20"]
            return Cw20Fund(contract_addr=body["contract_addr"], amount=int(body["amount"]))
        if "cw721" in data:
            body = data["cw721"]
            return Cw721Fund(contract_addr=body["contract_addr"], token_id=body["token_id"])
    except (KeyError, TypeError, ValueError) as exc:
        raise DeserializationError() from exc
    raise DeserializationError()


@dataclass(frozen=True)
class TransferFromMsg:
    """Token message moving an allowance from owner to recipient."""

    owner: str
    recipient: str
    amount: int

    def to_json(self) -> dict:
        return {
            "transfer_from": {
                "owner": self.owner,
                "recipient": self.recipient,
                "amount": str(self.amount),
            }
        }


@dataclass(frozen=True)
class TransferNftMsg:
    """NFT message moving a token to a recipient."""

    recipient: str
    token_id: str

    def to_json(self) -> dict:
        return {"transfer_nft": {"recipient": self.recipient, "token_id": self.token_id}}


@dataclass(frozen=True)
class InstantiateMsg:
    """Controller instantiation parameters."""

    owner: str | None = None
    fee_collector: str | None = None
    warp_account_code_id: int = 0
    minimum_reward: int = 0
    creation_fee: int = 0
    cancellation_fee: int = 0
    t_max: int = 0
    t_min: int = 0
    a_max: int = 0
    a_min: int = 0
    q_max: int = 0


@dataclass(frozen=True)
class UpdateConfigMsg:
    """Configuration changes; None leaves a field unchanged."""

    owner: str | None = None
    fee_collector: str | None = None
    minimum_reward: int | None = None
    creation_fee_percentage: int | None = None
    cancellation_fee_percentage: int | None = None
    t_max: int | None = None
    t_min: int | None = None
    a_max: int | None = None
    a_min: int | None = None
    q_max: int | None = None


@dataclass(frozen=True)
class CreateAccountMsg:
    funds: list[Fund] | None = None


@dataclass(frozen=True)
class DeleteJobMsg:
    id: int


@dataclass(frozen=True)
class UpdateJobMsg:
    id: int
    name: str | None = None
    description: str | None = None
    labels: list[str] | None = None
    added_reward: int | None = None


@dataclass(frozen=True)
class EvictJobMsg:
    id: int


@dataclass(frozen=True)
class QueryJobMsg:
    id: int


@dataclass(frozen=True)
class QueryAccountMsg:
    owner: str


@dataclass(frozen=True)
class QueryAccountsMsg:
    start_after: str | None = None
    limit: int | None = None


@dataclass(frozen=True)
class AccountInstantiateMsg:
    """Instantiation message of a warp account contract."""

    owner: str
    funds: list[Fund] | None = None

    def to_json(self) -> dict:
        funds = None if self.funds is None else [fund.to_json() for fund in self.funds]
        return {"owner": self.owner, "funds": funds}


@dataclass(frozen=True)
class GenericMsg:
    """Account execute message forwarding arbitrary messages."""

    msgs: list[Any] = field(default_factory=list)

    def to_json(self) -> dict:
        return {"generic": {"msgs": list(self.msgs)}}


@dataclass(frozen=True)
class WithdrawAssetsMsg:
    """Account execute message returning the listed assets to the owner."""

    asset_infos: list[AssetInfo] = field(default_factory=list)

    def to_json(self) -> dict:
        return {"withdraw_assets": {"asset_infos": [a.to_json() for a in self.asset_infos]}}


__all__ = [
    "Account",
    "AccountConfig",
    "AccountInstantiateMsg",
    "AssetInfo",
    "Coin",
    "Config",
    "CreateAccountMsg",
    "Cw20Asset",
    "Cw20Fund",
    "Cw721Asset",
    "Cw721Fund",
    "DeleteJobMsg",
    "EvictJobMsg",
    "Fund",
    "GenericMsg",
    "InstantiateMsg",
    "Job",
    "JobStatus",
    "NativeAsset",
    "QueryAccountMsg",
    "QueryAccountsMsg",
    "QueryJobMsg",
    "State",
    "TransferFromMsg",
    "TransferNftMsg",
    "UpdateConfigMsg",
    "UpdateJobMsg",
    "WithdrawAssetsMsg",
    "fund_from_json",
]