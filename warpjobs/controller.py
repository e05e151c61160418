"""Controller contract entry points: instantiation, migration and account replies."""

from __future__ import annotations

import json
from typing import Any

from .errors import (
    AccountAlreadyExistsError,
    CancellationFeeTooHighError,
    CreationFeeTooHighError,
    DeserializationError,
    MaxFeeUnderMinFeeError,
    MaxTimeUnderMinTimeError,
    RewardSmallerThanFeeError,
    StdError,
)
from .models import (
    Account,
    Config,
    Cw20Fund,
    Fund,
    InstantiateMsg,
    State,
    TransferFromMsg,
    TransferNftMsg,
    fund_from_json,
)
from .runtime import Coin, Deps, Env, Event, MessageInfo, Reply, Response, WasmExecute, to_binary, to_json_string
from .state import CONFIG, STATE, accounts


def validate_config(config: Config) -> None:
    """Raise if the fee, time or percentage settings are inconsistent."""
    if config.a_max < config.a_min:
        raise MaxFeeUnderMinFeeError()
    if config.t_max < config.t_min:
        raise MaxTimeUnderMinTimeError()
    if config.minimum_reward < config.a_min:
        raise RewardSmallerThanFeeError()
    if config.creation_fee_percentage > 100:
        raise CreationFeeTooHighError()
    if config.cancellation_fee_percentage > 100:
        raise CancellationFeeTooHighError()


def instantiate(deps: Deps, env: Env, info: MessageInfo, msg: InstantiateMsg) -> Response:
    """Store the initial state and configuration of the controller."""
    state = State(current_job_id=1, current_template_id=0, q=0)
    config = Config(
        owner=deps.api.addr_validate(msg.owner if msg.owner is not None else info.sender),
        fee_collector=deps.api.addr_validate(
            msg.fee_collector if msg.fee_collector is not None else info.sender
        ),
        warp_account_code_id=msg.warp_account_code_id,
        minimum_reward=msg.minimum_reward,
        creation_fee_percentage=msg.creation_fee,
        cancellation_fee_percentage=msg.cancellation_fee,
        t_max=msg.t_max,
        t_min=msg.t_min,
        a_max=msg.a_max,
        a_min=msg.a_min,
        q_max=msg.q_max,
    )
    validate_config(config)
    STATE.save(deps.storage, state)
    CONFIG.save(deps.storage, config)
    return Response()


def migrate(deps: Deps, env: Env, msg: Any) -> Response:
    """Migration has nothing to change."""
    return Response()


def _attribute(event: Event, key: str) -> str:
    found = next((attr for attr in event.attributes if attr.key == key), None)
    if found is None:
        raise StdError(f"cannot find `{key}` attribute")
    return found.value


def _parse_json(text: str) -> Any:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError) as exc:
        raise DeserializationError() from exc


def _parse_coins(text: str) -> list[Coin]:
    data = _parse_json(text)
    if not isinstance(data, list):
        raise DeserializationError()
    try:
        return [Coin.from_json(item) for item in data]
    except (KeyError, TypeError, ValueError) as exc:
        raise DeserializationError() from exc


def _parse_funds(text: str) -> list[Fund]:
    data = _parse_json(text)
    if data is None:
        return []
    if not isinstance(data, list):
        raise DeserializationError()
    return [fund_from_json(item) for item in data]


def _fund_transfer(deps: Deps, fund: Fund, owner: str, recipient: str) -> WasmExecute:
    contract_addr = deps.api.addr_validate(fund.contract_addr)
    if isinstance(fund, Cw20Fund):
        body = TransferFromMsg(owner=owner, recipient=recipient, amount=fund.amount)
    else:
        body = TransferNftMsg(recipient=recipient, token_id=fund.token_id)
    return WasmExecute(contract_addr=contract_addr, msg=to_binary(body), funds=[])


def save_account_reply(deps: Deps, env: Env, msg: Reply) -> Response:
    """Record a newly instantiated warp account and move its token funds in."""
    if not msg.succeeded:
        raise StdError(msg.error)

    event = next(
        (
            event
            for event in msg.events
            if any(a.key == "action" and a.value == "instantiate" for a in event.attributes)
        ),
        None,
    )
    if event is None:
        raise StdError("cannot find `instantiate` event")

    owner = _attribute(event, "owner")
    address = _attribute(event, "contract_addr")
    funds = _parse_coins(_attribute(event, "funds"))
    cw_funds = _parse_funds(_attribute(event, "cw_funds"))

    transfers = [_fund_transfer(deps, fund, owner, address) for fund in cw_funds]

    store = accounts()
    owner_addr = deps.api.addr_validate(owner)
    if store.has(deps.storage, owner_addr):
        raise AccountAlreadyExistsError()

    store.save(
        deps.storage,
        owner_addr,
        Account(owner=owner_addr, account=deps.api.addr_validate(address)),
    )

    return (
        Response()
        .add_attribute("action", "save_account")
        .add_attribute("owner", owner)
        .add_attribute("account_address", address)
        .add_attribute("funds", to_json_string(funds))
        .add_attribute("cw_funds", to_json_string(cw_funds))
        .add_messages(transfers)
    )