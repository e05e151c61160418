"""Warp account contract: holds a user's funds and acts for the owner or the controller."""

from __future__ import annotations

from typing import Any

from .errors import StdError, UnauthorizedError
from .models import (
    AccountConfig,
    AccountInstantiateMsg,
    Cw20Asset,
    Cw721Asset,
    GenericMsg,
    NativeAsset,
    TransferNftMsg,
    WithdrawAssetsMsg,
)
from .runtime import (
    BankSend,
    Deps,
    Env,
    MessageInfo,
    Response,
    WasmExecute,
    to_binary,
    to_json_string,
)
from .state import ACCOUNT_CONFIG


def instantiate(deps: Deps, env: Env, info: MessageInfo, msg: AccountInstantiateMsg) -> Response:
    """Store the owner and the controller address (the sender)."""
    ACCOUNT_CONFIG.save(
        deps.storage,
        AccountConfig(owner=deps.api.addr_validate(msg.owner), warp_addr=info.sender),
    )
    return (
        Response()
        .add_attribute("action", "instantiate")
        .add_attribute("contract_addr", env.contract_address)
        .add_attribute("owner", msg.owner)
        .add_attribute("funds", to_json_string(info.funds))
        .add_attribute("cw_funds", to_json_string(msg.funds))
    )


def _authorize(config: AccountConfig, sender: str) -> None:
    if sender != config.owner and sender != config.warp_addr:
        raise UnauthorizedError()


def execute(deps: Deps, env: Env, info: MessageInfo, msg: GenericMsg | WithdrawAssetsMsg) -> Response:
    """Forward messages or withdraw assets; only the owner or the controller may call."""
    config: AccountConfig = ACCOUNT_CONFIG.load(deps.storage)
    _authorize(config, info.sender)
    if isinstance(msg, GenericMsg):
        return Response().add_messages(msg.msgs).add_attribute("action", "generic")
    if isinstance(msg, WithdrawAssetsMsg):
        return withdraw_assets(deps, env, info, msg)
    raise StdError(f"unknown execute message: {type(msg).__name__}")


def query(deps: Deps, env: Env, msg: Any) -> bytes:
    """The account answers every query with an empty string."""
    return to_binary("")


def migrate(deps: Deps, env: Env, info: MessageInfo, msg: Any) -> Response:
    """Only the controller may migrate the account."""
    config: AccountConfig = ACCOUNT_CONFIG.load(deps.storage)
    if info.sender != config.warp_addr:
        raise UnauthorizedError()
    return Response()


def _int_field(response: Any, key: str) -> int:
    try:
        return int(response[key])
    except (KeyError, TypeError, ValueError) as exc:
        raise StdError(f"Error parsing query response: missing or invalid `{key}`") from exc


def _str_field(response: Any, key: str) -> str:
    try:
        value = response[key]
    except (KeyError, TypeError) as exc:
        raise StdError(f"Error parsing query response: missing `{key}`") from exc
    if not isinstance(value, str):
        raise StdError(f"Error parsing query response: invalid `{key}`")
    return value


def _withdraw_native(deps: Deps, env: Env, owner: str, denom: str) -> BankSend | None:
    balance = deps.querier.query_balance(env.contract_address, denom)
    if balance.amount > 0:
        return BankSend(to_address=owner, amount=[balance])
    return None


def _withdraw_cw20(deps: Deps, env: Env, owner: str, token: str) -> WasmExecute | None:
    response = deps.querier.query_wasm_smart(
        token, {"balance": {"address": env.contract_address}}
    )
    balance = _int_field(response, "balance")
    if balance > 0:
        return WasmExecute(
            contract_addr=token,
            msg=to_binary({"transfer": {"recipient": owner, "amount": str(balance)}}),
            funds=[],
        )
    return None


def _withdraw_cw721(deps: Deps, owner: str, token: str, token_id: str) -> WasmExecute | None:
    response = deps.querier.query_wasm_smart(
        token, {"owner_of": {"token_id": token_id, "include_expired": None}}
    )
    if _str_field(response, "owner") == owner:
        return WasmExecute(
            contract_addr=token,
            msg=to_binary(TransferNftMsg(recipient=owner, token_id=token_id)),
            funds=[],
        )
    return None


def withdraw_assets(deps: Deps, env: Env, info: MessageInfo, data: WithdrawAssetsMsg) -> Response:
    """Send every listed asset the account holds back to its owner."""
    config: AccountConfig = ACCOUNT_CONFIG.load(deps.storage)
    _authorize(config, info.sender)

    messages = []
    for asset in data.asset_infos:
        if isinstance(asset, NativeAsset):
            message = _withdraw_native(deps, env, config.owner, asset.denom)
        elif isinstance(asset, Cw20Asset):
            message = _withdraw_cw20(deps, env, config.owner, asset.addr)
        elif isinstance(asset, Cw721Asset):
            message = _withdraw_cw721(deps, config.owner, asset.addr, asset.token_id)
        else:
            raise StdError(f"unknown asset: {asset!r}")
        if message is not None:
            messages.append(message)

    return (
        Response()
        .add_messages(messages)
        .add_attribute("action", "withdraw_assets")
        .add_attribute("assets", to_json_string(data.asset_infos))
    )