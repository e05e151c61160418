"""Creation of warp accounts by the controller."""

from __future__ import annotations

from .controller import _fund_transfer
from .errors import AccountCannotCreateAccountError
from .models import AccountInstantiateMsg, CreateAccountMsg
from .runtime import (
    BankSend,
    Deps,
    Env,
    MessageInfo,
    ReplyOn,
    Response,
    SubMsg,
    WasmInstantiate,
    to_binary,
)
from .state import CONFIG, accounts


def create_account(deps: Deps, env: Env, info: MessageInfo, data: CreateAccountMsg) -> Response:
    """Instantiate a warp account for the sender, or fund the one it already has."""
    config = CONFIG.load(deps.storage)
    store = accounts()

    if store.find_by_account(deps.storage, info.sender) is not None:
        raise AccountCannotCreateAccountError()

    if store.has(deps.storage, info.sender):
        account = store.load(deps.storage, info.sender)
        messages: list = []
        if info.funds:
            messages.append(BankSend(to_address=account.account, amount=list(info.funds)))
        messages.extend(
            _fund_transfer(deps, fund, info.sender, account.account) for fund in data.funds or []
        )
        return (
            Response()
            .add_attribute("action", "create_account")
            .add_attribute("owner", account.owner)
            .add_attribute("account_address", account.account)
            .add_messages(messages)
        )

    submsg = SubMsg(
        id=0,
        msg=WasmInstantiate(
            admin=env.contract_address,
            code_id=config.warp_account_code_id,
            msg=to_binary(AccountInstantiateMsg(owner=info.sender, funds=data.funds)),
            funds=list(info.funds),
            label=info.sender,
        ),
        gas_limit=None,
        reply_on=ReplyOn.ALWAYS,
    )
    return Response().add_attribute("action", "create_account").add_submessage(submsg)