# warpjobs

`warpjobs` models a job scheduling controller. Users own warp accounts and
post jobs that carry a reward. Keepers evict jobs that have gone stale. The
controller keeps a queue counter. It takes creation and cancellation fees, and
it works out the eviction wait time and the eviction fee from how full the
queue is.

All of this runs on a small in-memory runtime. Storage is a plain `dict`. The
runtime also validates addresses, answers bank balance and contract queries,
and builds responses that carry attributes and messages. You call the
functions directly and inspect what they return.

The package has no dependencies beyond the standard library.

## Installation

```
pip install .
```

Run the test suite with:

```
pip install .[test]
pytest
```

## Modules

- `warpjobs.runtime` holds the runtime types:
  - `Coin`, `Attribute`, `Event`, `BankSend`, `WasmExecute`, `WasmInstantiate`
  - `ReplyOn`, `SubMsg`, `Reply`, `Response`, `Env`, `MessageInfo`
  - `Api`, which provides `addr_validate`
  - `Querier`, which provides `set_balance`, `register_contract`, `query_balance` and `query_wasm_smart`
  - `Deps`

  It also has the helpers `mock_env()`, `mock_info(sender, funds)`,
  `mock_dependencies()`, `to_binary(value)` and `to_json_string(value)`.
  `Response` methods (`add_attribute`, `add_attributes`, `add_message`,
  `add_messages`, `add_submessage`) return the response, so you can chain
  them.
- `warpjobs.models` holds the records and the message types:
  - records: `Config`, `State`, `Job`, `JobStatus`, `Account`, `AccountConfig`
  - assets: `NativeAsset`, `Cw20Asset`, `Cw721Asset`
  - funds: `Cw20Fund`, `Cw721Fund`, and `fund_from_json` to decode them
  - messages: `InstantiateMsg`, `UpdateConfigMsg`, `CreateAccountMsg`, `DeleteJobMsg`, `UpdateJobMsg`, `EvictJobMsg`, `QueryJobMsg`, `QueryAccountMsg`, `QueryAccountsMsg`, `AccountInstantiateMsg`, `GenericMsg`, `WithdrawAssetsMsg`, `TransferFromMsg`, `TransferNftMsg`
- `warpjobs.state` holds the stores:
  - `Item`, a single stored value
  - `JobStore`, jobs by id, which `range_by_reward` lists from the highest `(reward, id)` down
  - `AccountStore`, accounts by owner, each with a unique account address
  - the factories `pending_jobs()`, `finished_jobs()` and `accounts()`, and the items `CONFIG`, `STATE` and `ACCOUNT_CONFIG`
- `warpjobs.controller` has:
  - `instantiate`, which checks and stores the configuration
  - `migrate`
  - `save_account_reply`, which records an account from the events of its instantiation and builds transfers for its token funds
  - `validate_config`
- `warpjobs.execute_config` has `update_config`. Only the owner may call it.
- `warpjobs.execute_account` has `create_account`:
  - If the sender has no account yet, it returns an instantiate sub-message.
  - If the sender already has one, it funds that account.
  - It refuses if the sender is itself an account.
- `warpjobs.jobs` has:
  - `delete_job`, which cancels a job and refunds its reward minus the cancellation fee
  - `update_job`, which renames or relabels a job or adds to its reward
  - `evict_job`, which either requeues a stale job or finishes it as evicted
- `warpjobs.queries` has:
  - `query_job`, which looks a job up among finished jobs first, then pending ones
  - `query_account`
  - `query_accounts`, which returns pages of up to 50 accounts in owner order by default
  - `query_config`

  These return the record, or a list of records, directly.
- `warpjobs.account` is the per-user account contract. It has `instantiate`,
  `execute`, `query`, `migrate` and `withdraw_assets`:
  - `execute` takes a `GenericMsg` or a `WithdrawAssetsMsg`.
  - Only the owner or the controller may call `execute` and `withdraw_assets`.
  - Only the controller may call `migrate`.
- `warpjobs.errors` defines `ContractError` and its subclasses. It also has
  `map_contract_error(message)`, which explains a raw chain error string by
  its module and error code.

## Example

```python
from warpjobs.controller import instantiate
from warpjobs.errors import UnauthorizedError
from warpjobs.execute_config import update_config
from warpjobs.jobs import delete_job
from warpjobs.models import Account, DeleteJobMsg, InstantiateMsg, Job, State, UpdateConfigMsg
from warpjobs.runtime import mock_dependencies, mock_env, mock_info
from warpjobs.state import STATE, accounts, pending_jobs

deps = mock_dependencies()
env = mock_env()
info = mock_info("alice", [])

instantiate(deps, env, info, InstantiateMsg(owner="alice", fee_collector="alice", cancellation_fee=10))

response = update_config(deps, env, info, UpdateConfigMsg(minimum_reward=7, a_min=7, a_max=8))
print(response.attributes)

try:
    update_config(deps, env, mock_info("mallory", []), UpdateConfigMsg())
except UnauthorizedError as exc:
    print(exc)  # Unauthorized

# Place an account and a pending job in storage, then cancel the job.
accounts().save(deps.storage, "alice", Account(owner="alice", account="alice-account"))
STATE.save(deps.storage, State(current_job_id=2, current_template_id=0, q=1))
pending_jobs().save(deps.storage, 1, Job(id=1, owner="alice", last_update_time=0, name="ping", reward=100))

response = delete_job(deps, env, info, DeleteJobMsg(id=1))
for sub in response.messages:
    print(sub.msg)  # 90 back to alice-account, 10 to the fee collector
```

Failures are raised as exceptions. Every error derives from `ContractError`.
Its message is the text the contract reports, and two errors compare equal
when they have the same type and message.

## What the package does not do

- It cannot create or execute jobs. There is no job creation, no condition
  checking, and no handling of the reply after a job's messages run.
- The only way to add a job is to save it through `pending_jobs()`, as in the
  example above.
- It has no job listing or filtering query and no query simulation.
- There is no single entry point that dispatches execute or query messages.
  You call each function yourself.
- There is no command-line tool, server, or persistent storage. Everything
  lives in the `dict` held by `Deps.storage`.