import pytest

from warpjobs.controller import instantiate, save_account_reply
from warpjobs.errors import NotFoundError
from warpjobs.models import (
    Account,
    InstantiateMsg,
    Job,
    JobStatus,
    QueryAccountMsg,
    QueryAccountsMsg,
    QueryJobMsg,
)
from warpjobs.queries import query_account, query_accounts, query_config, query_job
from warpjobs.runtime import Attribute, Event, Reply, mock_dependencies, mock_env, mock_info
from warpjobs.state import accounts, finished_jobs, pending_jobs

PREFIX = "terra1vladvladvladvladvladvladvladvladvl"


@pytest.fixture
def warp():
    deps = mock_dependencies()
    env = mock_env()
    info = mock_info("vlad", [])
    instantiate(deps, env, info, InstantiateMsg(owner="vlad", fee_collector="vlad"))
    return deps, env


def _create_account(deps, env, account_id):
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
    return save_account_reply(deps, env, reply)


def test_query_account_successful(warp):
    deps, env = warp
    reply_res = _create_account(deps, env, 0)
    owner = next(a.value for a in reply_res.attributes if a.key == "owner")
    address = next(a.value for a in reply_res.attributes if a.key == "account_address")

    res = query_account(deps, env, QueryAccountMsg(owner=owner))
    assert res == Account(owner=owner, account=address)


def test_query_account_does_not_exist(warp):
    deps, env = warp
    with pytest.raises(NotFoundError) as excinfo:
        query_account(deps, env, QueryAccountMsg(owner=f"{PREFIX[:-1]}a000"))
    assert excinfo.value == NotFoundError("Account")


def test_query_accounts_ordering_and_pagination(warp):
    deps, env = warp
    for account_id in (3, 1, 2):
        _create_account(deps, env, account_id)

    all_accounts = query_accounts(deps, env, QueryAccountsMsg())
    assert [a.owner for a in all_accounts] == [f"{PREFIX}1001", f"{PREFIX}1002", f"{PREFIX}1003"]

    page = query_accounts(deps, env, QueryAccountsMsg(start_after=f"{PREFIX}1001", limit=1))
    assert page == [Account(owner=f"{PREFIX}1002", account=f"{PREFIX}2002")]


def test_query_accounts_default_page_size(warp):
    deps, env = warp
    store = accounts()
    for n in range(60):
        store.save(deps.storage, f"owner{n:03d}", Account(owner=f"owner{n:03d}", account=f"acct{n:03d}"))
    res = query_accounts(deps, env, QueryAccountsMsg())
    assert len(res) == 50
    assert res[-1].owner == "owner049"


def test_query_job_prefers_finished(warp):
    deps, env = warp
    pending_jobs().save(deps.storage, 1, Job(id=1, owner="vlad", last_update_time=0, name="a", reward=10))
    assert query_job(deps, env, QueryJobMsg(id=1)).status == JobStatus.PENDING

    finished_jobs().save(
        deps.storage,
        1,
        Job(id=1, owner="vlad", last_update_time=0, name="a", reward=10, status=JobStatus.EXECUTED),
    )
    assert query_job(deps, env, QueryJobMsg(id=1)).status == JobStatus.EXECUTED


def test_query_job_does_not_exist(warp):
    deps, env = warp
    with pytest.raises(NotFoundError) as excinfo:
        query_job(deps, env, QueryJobMsg(id=7))
    assert excinfo.value == NotFoundError("Job")


def test_query_config(warp):
    deps, env = warp
    config = query_config(deps, env, None)
    assert config.owner == "vlad"
    assert config.fee_collector == "vlad"
    assert config.minimum_reward == 0
    assert config.q_max == 0