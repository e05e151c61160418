import pytest

from warpjobs.controller import instantiate, save_account_reply
from warpjobs.errors import (
    AccountAlreadyExistsError,
    AccountCannotCreateAccountError,
    NotFoundError,
)
from warpjobs.execute_account import create_account
from warpjobs.models import AccountInstantiateMsg, CreateAccountMsg, Cw20Fund, InstantiateMsg
from warpjobs.runtime import (
    Attribute,
    BankSend,
    Coin,
    Event,
    Reply,
    ReplyOn,
    Response,
    SubMsg,
    WasmExecute,
    WasmInstantiate,
    mock_dependencies,
    mock_env,
    mock_info,
    to_binary,
)

PREFIX = "terra1vladvladvladvladvladvladvladvladvl"


def instantiate_warp(deps, env, info):
    return instantiate(
        deps,
        env,
        info,
        InstantiateMsg(owner=info.sender, fee_collector=info.sender),
    )


def create_warp_account(deps, env, info, account_id):
    try:
        create_res = create_account(deps, env, info, CreateAccountMsg(funds=None))
    except Exception as exc:  # collected so both results can be checked
        create_res = exc
    reply = Reply(
        id=0,
        events=[
            Event(
                "wasm",
                [
                    Attribute("action", "instantiate"),
                    Attribute("owner", f"{PREFIX}{account_id + 1000}"),
                    Attribute("contract_addr", f"{PREFIX}{account_id + 2000}"),
                    Attribute("funds", "[]"),
                    Attribute("cw_funds", "[]"),
                ],
            )
        ],
    )
    try:
        reply_res = save_account_reply(deps, env, reply)
    except Exception as exc:
        reply_res = exc
    return create_res, reply_res


def expected_create(sender, funds=()):
    return Response().add_attribute("action", "create_account").add_submessage(
        SubMsg(
            id=0,
            msg=WasmInstantiate(
                admin="cosmos2contract",
                code_id=0,
                msg=to_binary(AccountInstantiateMsg(owner=sender, funds=None)),
                funds=list(funds),
                label=sender,
            ),
            gas_limit=None,
            reply_on=ReplyOn.ALWAYS,
        )
    )


def test_create_account_success():
    deps = mock_dependencies()
    env = mock_env()
    info = mock_info("vlad", [])
    instantiate_warp(deps, env, info)

    create_res, reply_res = create_warp_account(deps, env, info, 0)

    assert create_res == expected_create("vlad")
    assert reply_res == (
        Response()
        .add_attribute("action", "save_account")
        .add_attribute("owner", f"{PREFIX}1000")
        .add_attribute("account_address", f"{PREFIX}2000")
        .add_attribute("funds", "[]")
        .add_attribute("cw_funds", "[]")
    )


def test_create_account_exists():
    deps = mock_dependencies()
    env = mock_env()
    info = mock_info("vlad", [])
    instantiate_warp(deps, env, info)

    create_warp_account(deps, env, info, 0)
    create_res, reply_res = create_warp_account(deps, env, info, 0)

    assert create_res == expected_create("vlad")
    assert isinstance(reply_res, AccountAlreadyExistsError)
    assert reply_res == AccountAlreadyExistsError()


def test_create_account_by_account():
    deps = mock_dependencies()
    env = mock_env()
    info = mock_info("vlad", [Coin("uluna", 100)])
    instantiate_warp(deps, env, info)

    _, reply_first = create_warp_account(deps, env, info, 0)
    address = next(a.value for a in reply_first.attributes if a.key == "account_address")

    info = mock_info(address, [Coin("uluna", 100)])
    create_res, _ = create_warp_account(deps, env, info, 0)

    assert create_res == AccountCannotCreateAccountError()


def test_create_account_forwards_native_funds_to_instantiate():
    deps = mock_dependencies()
    env = mock_env()
    info = mock_info("vlad", [Coin("uluna", 100)])
    instantiate_warp(deps, env, info)

    res = create_account(deps, env, info, CreateAccountMsg())
    assert res == expected_create("vlad", [Coin("uluna", 100)])


def test_create_account_existing_owner_gets_funds_transferred():
    deps = mock_dependencies()
    env = mock_env()
    instantiate_warp(deps, env, mock_info("vlad", []))
    create_warp_account(deps, env, mock_info("vlad", []), 0)

    owner = f"{PREFIX}1000"
    account = f"{PREFIX}2000"
    info = mock_info(owner, [Coin("uluna", 100)])
    res = create_account(
        deps, env, info, CreateAccountMsg(funds=[Cw20Fund(contract_addr="token", amount=5)])
    )

    assert [(a.key, a.value) for a in res.attributes] == [
        ("action", "create_account"),
        ("owner", owner),
        ("account_address", account),
    ]
    assert [m.msg for m in res.messages] == [
        BankSend(to_address=account, amount=[Coin("uluna", 100)]),
        WasmExecute(
            contract_addr="token",
            msg=to_binary(
                {"transfer_from": {"owner": owner, "recipient": account, "amount": "5"}}
            ),
            funds=[],
        ),
    ]


def test_create_account_existing_owner_without_funds_sends_nothing():
    deps = mock_dependencies()
    env = mock_env()
    instantiate_warp(deps, env, mock_info("vlad", []))
    create_warp_account(deps, env, mock_info("vlad", []), 0)

    res = create_account(deps, env, mock_info(f"{PREFIX}1000", []), CreateAccountMsg())
    assert res.messages == []
    assert res.attributes[0] == Attribute("action", "create_account")


def test_create_account_requires_config():
    deps = mock_dependencies()
    with pytest.raises(NotFoundError) as excinfo:
        create_account(deps, mock_env(), mock_info("vlad", []), CreateAccountMsg())
    assert "Config" in str(excinfo.value)