"""Job maintenance by the controller: cancellation, updates and eviction."""

from __future__ import annotations

import dataclasses

from .errors import (
    JobAlreadyExistsError,
    JobAlreadyFinishedError,
    JobDoesNotExistError,
    JobNotActiveError,
    NameTooLongError,
    NameTooShortError,
    OverflowError,
    RewardTooSmallError,
    UnauthorizedError,
    EvictionPeriodNotElapsedError,
)
from .models import (
    Config,
    DeleteJobMsg,
    EvictJobMsg,
    GenericMsg,
    Job,
    JobStatus,
    State,
    UpdateJobMsg,
)
from .runtime import (
    BankSend,
    Coin,
    Deps,
    Env,
    MessageInfo,
    Response,
    WasmExecute,
    to_binary,
    to_json_string,
)
from .state import CONFIG, STATE, accounts, finished_jobs, pending_jobs

DENOM = "uluna"
MAX_NAME_LENGTH = 140


def _checked_sub(left: int, right: int) -> int:
    if right > left:
        raise OverflowError()
    return left - right


def _send_from_account(account_addr: str, to_address: str, amount: int) -> WasmExecute:
    """Ask a warp account to send native tokens on the controller's behalf."""
    return WasmExecute(
        contract_addr=account_addr,
        msg=to_binary(
            GenericMsg(msgs=[BankSend(to_address=to_address, amount=[Coin(DENOM, amount)])])
        ),
        funds=[],
    )


def _validate_name(name: str | None) -> None:
    if name is None:
        return
    if len(name.encode("utf-8")) > MAX_NAME_LENGTH:
        raise NameTooLongError()
    if not name:
        raise NameTooShortError()


def delete_job(deps: Deps, env: Env, info: MessageInfo, data: DeleteJobMsg) -> Response:
    """Cancel a pending job and refund its reward minus the cancellation fee."""
    config: Config = CONFIG.load(deps.storage)
    state: State = STATE.load(deps.storage)
    pending = pending_jobs()
    job = pending.load(deps.storage, data.id)

    if job.status != JobStatus.PENDING:
        raise JobNotActiveError()
    if job.owner != info.sender:
        raise UnauthorizedError()

    account = accounts().load(deps.storage, info.sender)

    finished = finished_jobs()
    if finished.has(deps.storage, data.id):
        raise JobAlreadyFinishedError()
    new_q = _checked_sub(state.q, 1)

    finished.save(deps.storage, data.id, dataclasses.replace(job, status=JobStatus.CANCELLED))
    pending.remove(deps.storage, data.id)
    STATE.save(deps.storage, dataclasses.replace(state, q=new_q))

    fee = job.reward * config.cancellation_fee_percentage // 100
    refunds = [
        BankSend(to_address=account.account, amount=[Coin(DENOM, job.reward - fee)]),
        BankSend(to_address=config.fee_collector, amount=[Coin(DENOM, fee)]),
    ]

    return (
        Response()
        .add_messages(refunds)
        .add_attribute("action", "delete_job")
        .add_attribute("job_id", job.id)
        .add_attribute("job_status", to_json_string(job.status))
        .add_attribute("deletion_fee", fee)
    )


def update_job(deps: Deps, env: Env, info: MessageInfo, data: UpdateJobMsg) -> Response:
    """Rename, relabel or top up the reward of a pending job."""
    pending = pending_jobs()
    job = pending.load(deps.storage, data.id)
    config: Config = CONFIG.load(deps.storage)

    if info.sender != job.owner:
        raise UnauthorizedError()

    account = accounts().load(deps.storage, info.sender)
    added_reward = 0 if data.added_reward is None else data.added_reward

    _validate_name(data.name)

    fee = added_reward * config.creation_fee_percentage // 100
    if added_reward and not fee:
        raise RewardTooSmallError()

    def apply(current: Job | None) -> Job:
        if current is None:
            raise JobDoesNotExistError()
        return dataclasses.replace(
            current,
            last_update_time=(
                env.block_time
                if added_reward > config.minimum_reward
                else current.last_update_time
            ),
            name=current.name if data.name is None else data.name,
            description=current.description if data.description is None else data.description,
            labels=current.labels if data.labels is None else list(data.labels),
            reward=current.reward + added_reward,
        )

    job = pending.update(deps.storage, data.id, apply)

    messages = []
    if added_reward > 0:
        messages.append(_send_from_account(account.account, env.contract_address, added_reward))
        messages.append(_send_from_account(account.account, config.fee_collector, fee))

    return (
        Response()
        .add_messages(messages)
        .add_attribute("action", "update_job")
        .add_attribute("job_id", job.id)
        .add_attribute("job_owner", job.owner)
        .add_attribute("job_name", job.name)
        .add_attribute("job_status", to_json_string(job.status))
        .add_attribute("job_condition", to_json_string(job.condition))
        .add_attribute("job_msgs", to_json_string(job.msgs))
        .add_attribute("job_reward", job.reward)
        .add_attribute("job_update_fee", fee)
        .add_attribute("job_last_updated_time", job.last_update_time)
    )


def _eviction_terms(config: Config, state: State) -> tuple[int, int]:
    """Waiting time and eviction fee, scaled by how full the queue is."""
    if state.q < config.q_max:
        wait = config.t_max - state.q * (config.t_max - config.t_min) // config.q_max
        fee = config.a_min
    else:
        wait = config.t_min
        fee = config.a_max
    return wait, fee


def evict_job(deps: Deps, env: Env, info: MessageInfo, data: EvictJobMsg) -> Response:
    """Evict a stale job: requeue it if the owner can pay, otherwise finish it."""
    config: Config = CONFIG.load(deps.storage)
    state: State = STATE.load(deps.storage)
    pending = pending_jobs()
    job = pending.load(deps.storage, data.id)
    account = accounts().load(deps.storage, job.owner)

    account_amount = deps.querier.query_balance(account.account, DENOM).amount

    if job.status != JobStatus.PENDING:
        raise UnauthorizedError()

    wait, fee = _eviction_terms(config, state)

    if _checked_sub(env.block_time, job.last_update_time) < wait:
        raise EvictionPeriodNotElapsedError()

    if job.requeue_on_evict and account_amount >= fee:
        messages = [_send_from_account(account.account, info.sender, fee)]

        def requeue(current: Job | None) -> Job:
            if current is None:
                raise JobDoesNotExistError()
            return dataclasses.replace(
                current, last_update_time=env.block_time, status=JobStatus.PENDING
            )

        job_status = pending.update(deps.storage, data.id, requeue).status
    else:
        finished = finished_jobs()
        if finished.has(deps.storage, data.id):
            raise JobAlreadyExistsError()
        remainder = _checked_sub(job.reward, fee)
        evicted = dataclasses.replace(
            job, last_update_time=env.block_time, status=JobStatus.EVICTED
        )
        finished.save(deps.storage, data.id, evicted)
        pending.remove(deps.storage, data.id)
        job_status = evicted.status
        messages = [
            BankSend(to_address=info.sender, amount=[Coin(DENOM, fee)]),
            BankSend(to_address=account.account, amount=[Coin(DENOM, remainder)]),
        ]

    return (
        Response()
        .add_attribute("action", "evict_job")
        .add_attribute("job_id", job.id)
        .add_attribute("job_status", to_json_string(job_status))
        .add_messages(messages)
    )