"""Storage layout of the contracts."""

from __future__ import annotations

import copy
from typing import Any, Callable, Iterator

from .errors import NotFoundError, StdError
from .models import Account, Job

QUERY_PAGE_SIZE = 50

_UNIQUE_VIOLATION = "Violates unique constraint on index"


class Item:
    """A single value stored under a namespace."""

    def __init__(self, namespace: str, kind: str) -> None:
        self.namespace = namespace
        self.kind = kind

    def load(self, storage: dict) -> Any:
        try:
            value = storage[self.namespace]
        except KeyError:
            raise NotFoundError(self.kind) from None
        return copy.deepcopy(value)

    def save(self, storage: dict, value: Any) -> None:
        storage[self.namespace] = copy.deepcopy(value)


class JobStore:
    """Jobs keyed by id, ordered by (reward, id) for listing."""

    kind = "Job"

    def __init__(self, namespace: str) -> None:
        self.namespace = namespace

    def _jobs(self, storage: dict) -> dict[int, Job]:
        return storage.setdefault(self.namespace, {})

    def has(self, storage: dict, job_id: int) -> bool:
        return job_id in self._jobs(storage)

    def load(self, storage: dict, job_id: int) -> Job:
        try:
            return copy.deepcopy(self._jobs(storage)[job_id])
        except KeyError:
            raise NotFoundError(self.kind) from None

    def save(self, storage: dict, job_id: int, job: Job) -> None:
        jobs = self._jobs(storage)
        key = (job.reward, job.id)
        if any(k != job_id and (j.reward, j.id) == key for k, j in jobs.items()):
            raise StdError(_UNIQUE_VIOLATION)
        jobs[job_id] = copy.deepcopy(job)

    def remove(self, storage: dict, job_id: int) -> None:
        self._jobs(storage).pop(job_id, None)

    def update(
        self, storage: dict, job_id: int, action: Callable[[Job | None], Job]
    ) -> Job:
        """Replace a job by what action returns for the current one (or None)."""
        current = self._jobs(storage).get(job_id)
        new_job = action(copy.deepcopy(current))
        self.save(storage, job_id, new_job)
        return copy.deepcopy(new_job)

    def range_by_reward(
        self, storage: dict, start_after: tuple[int, int] | None = None
    ) -> Iterator[Job]:
        """Jobs from highest to lowest (reward, id), strictly below start_after."""
        jobs = sorted(self._jobs(storage).values(), key=lambda j: (j.reward, j.id), reverse=True)
        bound = None if start_after is None else tuple(start_after)
        for job in jobs:
            if bound is not None and (job.reward, job.id) >= bound:
                continue
            yield copy.deepcopy(job)


class AccountStore:
    """Accounts keyed by owner, with each account address unique."""

    kind = "Account"

    def __init__(self, namespace: str = "accounts") -> None:
        self.namespace = namespace

    def _accounts(self, storage: dict) -> dict[str, Account]:
        return storage.setdefault(self.namespace, {})

    def has(self, storage: dict, owner: str) -> bool:
        return owner in self._accounts(storage)

    def load(self, storage: dict, owner: str) -> Account:
        try:
            return copy.deepcopy(self._accounts(storage)[owner])
        except KeyError:
            raise NotFoundError(self.kind) from None

    def save(self, storage: dict, owner: str, account: Account) -> None:
        accounts = self._accounts(storage)
        if any(k != owner and a.account == account.account for k, a in accounts.items()):
            raise StdError(_UNIQUE_VIOLATION)
        accounts[owner] = copy.deepcopy(account)

    def find_by_account(self, storage: dict, account: str) -> Account | None:
        """The record whose account contract address is the given one, if any."""
        return next(
            (copy.deepcopy(a) for a in self._accounts(storage).values() if a.account == account),
            None,
        )

    def range(self, storage: dict, start_after: str | None = None) -> Iterator[Account]:
        """Accounts in ascending owner order, strictly after start_after."""
        for owner in sorted(self._accounts(storage)):
            if start_after is not None and owner <= start_after:
                continue
            yield copy.deepcopy(self._accounts(storage)[owner])


def pending_jobs() -> JobStore:
    return JobStore("pending_jobs_v2")


def finished_jobs() -> JobStore:
    return JobStore("finished_jobs_v2")


def accounts() -> AccountStore:
    return AccountStore("accounts")


CONFIG = Item("config", "Config")
STATE = Item("state", "State")
ACCOUNT_CONFIG = Item("config", "AccountConfig")