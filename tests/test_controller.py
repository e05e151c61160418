import pytest

from warpjobs.controller import instantiate, migrate, save_account_reply
from warpjobs.errors import (
    AccountAlreadyExistsError,
    CancellationFeeTooHighError,
    CreationFeeTooHighError,
    DeserializationError,
    MaxFeeUnderMinFeeError,
    MaxTimeUnderMinTimeError,
    RewardSmallerThanFeeError,
    StdError,
)
from warpjobs.models import Account, Config, InstantiateMsg, State
from warpjobs.runtime import (
    Attribute,
    Event,
    Reply,
    Response,
    WasmExecute,
    mock_dependencies,
    mock_env,
    mock_info,
)
from warpjobs.state import CONFIG, STATE, accounts

OWNER = "terra1vladvladvladvladvladvladvladvladvl1000"
ACCOUNT = "terra1vladvladvladvladvladvladvladvladvl2000"


def _instantiate_warp(deps, **overrides):
    info = mock_info("vlad")
    fields = dict(owner="vlad", fee_collector="vlad")
    fields.update(overrides)
    return instantiate(deps, mock_env(), info, InstantiateMsg(**fields))


def _reply(funds="[]", cw_funds="[]", account_id=0):
    return Reply(
        id=0,
        events=[
            Event(
                "wasm",
                [
                    Attribute("action", "instantiate"),
                    Attribute("owner", f"terra1vladvladvladvladvladvladvladvladvl{account_id + 1000}"),
                    Attribute(
                        "contract_addr",
                        f"terra1vladvladvladvladvladvladvladvladvl{account_id + 2000}",
                    ),
                    Attribute("funds", funds),
                    Attribute("cw_funds", cw_funds),
                ],
            )
        ],
    )


def test_instantiate_stores_state_and_config():
    deps = mock_dependencies()
    assert _instantiate_warp(deps, minimum_reward=10, a_min=5, a_max=7) == Response()
    assert STATE.load(deps.storage) == State(current_job_id=1, current_template_id=0, q=0)
    config = CONFIG.load(deps.storage)
    assert config == Config(
        owner="vlad",
        fee_collector="vlad",
        warp_account_code_id=0,
        minimum_reward=10,
        creation_fee_percentage=0,
        cancellation_fee_percentage=0,
        t_max=0,
        t_min=0,
        a_max=7,
        a_min=5,
        q_max=0,
    )


def test_instantiate_defaults_owner_to_sender():
    deps = mock_dependencies()
    instantiate(deps, mock_env(), mock_info("sender"), InstantiateMsg())
    config = CONFIG.load(deps.storage)
    assert (config.owner, config.fee_collector) == ("sender", "sender")


@pytest.mark.parametrize(
    "overrides, error",
    [
        (dict(a_max=1, a_min=2, minimum_reward=5), MaxFeeUnderMinFeeError),
        (dict(t_max=1, t_min=2), MaxTimeUnderMinTimeError),
        (dict(a_min=3, a_max=4, minimum_reward=2), RewardSmallerThanFeeError),
        (dict(creation_fee=101), CreationFeeTooHighError),
        (dict(cancellation_fee=101), CancellationFeeTooHighError),
    ],
)
def test_instantiate_rejects_bad_config(overrides, error):
    deps = mock_dependencies()
    with pytest.raises(error):
        _instantiate_warp(deps, **overrides)
    assert "config" not in deps.storage


def test_instantiate_rejects_invalid_owner():
    with pytest.raises(StdError):
        _instantiate_warp(mock_dependencies(), owner="VLAD")


def test_migrate_returns_empty_response():
    assert migrate(mock_dependencies(), mock_env(), None) == Response()


def test_save_account_reply_success():
    deps = mock_dependencies()
    _instantiate_warp(deps)
    res = save_account_reply(deps, mock_env(), _reply())
    assert res == (
        Response()
        .add_attribute("action", "save_account")
        .add_attribute("owner", OWNER)
        .add_attribute("account_address", ACCOUNT)
        .add_attribute("funds", "[]")
        .add_attribute("cw_funds", "[]")
    )
    assert accounts().load(deps.storage, OWNER) == Account(owner=OWNER, account=ACCOUNT)


def test_save_account_reply_account_exists():
    deps = mock_dependencies()
    _instantiate_warp(deps)
    save_account_reply(deps, mock_env(), _reply())
    with pytest.raises(AccountAlreadyExistsError):
        save_account_reply(deps, mock_env(), _reply())


def test_save_account_reply_null_cw_funds_and_coins():
    deps = mock_dependencies()
    res = save_account_reply(
        deps, mock_env(), _reply(funds='[{"denom":"uluna","amount":"100"}]', cw_funds="null")
    )
    values = {a.key: a.value for a in res.attributes}
    assert values["funds"] == '[{"denom":"uluna","amount":"100"}]'
    assert values["cw_funds"] == "[]"


def test_save_account_reply_transfers_cw_funds():
    deps = mock_dependencies()
    cw_funds = (
        '[{"cw20":{"contract_addr":"token","amount":"5"}},'
        '{"cw721":{"contract_addr":"nft","token_id":"7"}}]'
    )
    res = save_account_reply(deps, mock_env(), _reply(cw_funds=cw_funds))
    assert [m.msg for m in res.messages] == [
        WasmExecute(
            contract_addr="token",
            msg=(
                '{"transfer_from":{"owner":"%s","recipient":"%s","amount":"5"}}' % (OWNER, ACCOUNT)
            ).encode(),
            funds=[],
        ),
        WasmExecute(
            contract_addr="nft",
            msg=('{"transfer_nft":{"recipient":"%s","token_id":"7"}}' % ACCOUNT).encode(),
            funds=[],
        ),
    ]
    assert {a.key: a.value for a in res.attributes}["cw_funds"] == cw_funds


def test_save_account_reply_error_result():
    with pytest.raises(StdError) as exc:
        save_account_reply(mock_dependencies(), mock_env(), Reply(id=0, error="boom"))
    assert exc.value == StdError("boom")


def test_save_account_reply_missing_event():
    reply = Reply(id=0, events=[Event("wasm", [Attribute("action", "other")])])
    with pytest.raises(StdError) as exc:
        save_account_reply(mock_dependencies(), mock_env(), reply)
    assert exc.value == StdError("cannot find `instantiate` event")


def test_save_account_reply_missing_attribute():
    reply = Reply(id=0, events=[Event("wasm", [Attribute("action", "instantiate")])])
    with pytest.raises(StdError) as exc:
        save_account_reply(mock_dependencies(), mock_env(), reply)
    assert exc.value == StdError("cannot find `owner` attribute")


def test_save_account_reply_bad_funds_json():
    with pytest.raises(DeserializationError):
        save_account_reply(mock_dependencies(), mock_env(), _reply(funds="not json"))