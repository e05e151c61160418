"""Read-only queries of the controller contract."""

from __future__ import annotations

from itertools import islice

from .models import Account, Config, Job, QueryAccountMsg, QueryAccountsMsg, QueryJobMsg
from .runtime import Deps, Env
from .state import CONFIG, QUERY_PAGE_SIZE, accounts, finished_jobs, pending_jobs


def query_job(deps: Deps, env: Env, data: QueryJobMsg) -> Job:
    """A job by id, looked up among finished jobs first, then pending ones."""
    finished = finished_jobs()
    if finished.has(deps.storage, data.id):
        return finished.load(deps.storage, data.id)
    return pending_jobs().load(deps.storage, data.id)


def query_account(deps: Deps, env: Env, data: QueryAccountMsg) -> Account:
    """The warp account of an owner."""
    return accounts().load(deps.storage, deps.api.addr_validate(data.owner))


def query_accounts(deps: Deps, env: Env, data: QueryAccountsMsg) -> list[Account]:
    """A page of accounts in ascending owner order."""
    start_after = None if data.start_after is None else deps.api.addr_validate(data.start_after)
    limit = QUERY_PAGE_SIZE if data.limit is None else data.limit
    return list(islice(accounts().range(deps.storage, start_after), limit))


def query_config(deps: Deps, env: Env, data: object = None) -> Config:
    """The controller configuration."""
    return CONFIG.load(deps.storage)