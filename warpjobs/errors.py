"""Errors raised by the controller and account contracts."""

from __future__ import annotations

import json


def _debug(text: str) -> str:
    """Render a string the way a debug formatter quotes it."""
    return json.dumps(text, ensure_ascii=False)


class ContractError(Exception):
    """Base class of every contract error.

    Two errors are equal when they have the same type and the same message.
    """

    message = "Contract error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(self.message if message is None else message)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContractError):
            return NotImplemented
        return type(self) is type(other) and self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class StdError(ContractError):
    """Generic failure reported by the runtime, the storage or a query."""

    def __init__(self, msg: str) -> None:
        self.msg = msg
        super().__init__(f"Generic error: {msg}")


class NotFoundError(StdError):
    """A stored value of the given kind does not exist."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self.msg = f"{kind} not found"
        ContractError.__init__(self, self.msg)


class UnauthorizedError(ContractError):
    message = "Unauthorized"


class InvalidFeeError(ContractError):
    message = "Invalid fee"


class FundsMismatchError(ContractError):
    message = "Funds array in message does not match funds array in job."


class RewardTooSmallError(ContractError):
    message = "Reward provided is smaller than minimum"


class NameTooShortError(ContractError):
    message = "Name must be at least 1 character long"


class NameTooLongError(ContractError):
    message = "Name cannot exceed 140 characters"


class DistributingMoreRewardThanReceivedError(ContractError):
    message = "Attempting to distribute more rewards than received from the action"


class InvalidArgumentsError(ContractError):
    message = "Invalid arguments"


class AccountDoesNotExistError(ContractError):
    message = "Account does not exist"


class AccountAlreadyExistsError(ContractError):
    message = "Account already exists"


class AccountCannotCreateAccountError(ContractError):
    message = "Account cannot create an account"


class JobAlreadyFinishedError(ContractError):
    message = "Job already finished"


class JobAlreadyExistsError(ContractError):
    message = "Job already exists"


class JobDoesNotExistError(ContractError):
    message = "Job does not exist"


class JobNotActiveError(ContractError):
    message = "Job not active"


class CancellationFeeTooHighError(ContractError):
    message = "Cancellation fee too high"


class CreationFeeTooHighError(ContractError):
    message = "Creation fee too high"


class CustomError(ContractError):
    """Free-form error carrying a value."""

    def __init__(self, val: str) -> None:
        self.val = val
        super().__init__(f"Custom Error val: {_debug(val)}")


class OverflowError(CustomError):  # noqa: A001 - mirrors the arithmetic failure name
    """Checked arithmetic went out of range."""

    def __init__(self) -> None:
        super().__init__("ERROR: Overflow error")


class DivideByZeroError(CustomError):
    """Checked division by zero."""

    def __init__(self) -> None:
        super().__init__("ERROR: Division by zero")


class DeserializationError(ContractError):
    message = "Error deserializing data"


class SerializationError(ContractError):
    message = "Error serializing data"


class DecodeError(ContractError):
    message = "Error decoding JSON result"


class ResolveError(ContractError):
    message = "Error resolving JSON path"


class HydrationError(ContractError):
    def __init__(self, msg: str) -> None:
        self.msg = msg
        super().__init__(f"Hydration error: {_debug(msg)}")


class FunctionError(ContractError):
    def __init__(self, msg: str) -> None:
        self.msg = msg
        super().__init__(f"Function error: {_debug(msg)}")


class VariableNotFoundError(ContractError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Variable not found: {_debug(name)}.")


class ConditionError(ContractError):
    def __init__(self, msg: str) -> None:
        self.msg = msg
        super().__init__(f"Condition error: {_debug(msg)}")


class MsgError(ContractError):
    def __init__(self, msg: str) -> None:
        self.msg = msg
        super().__init__(f"Msg error: {_debug(msg)}")


class MaxFeeUnderMinFeeError(ContractError):
    message = "Max eviction fee smaller than minimum eviction fee."


class MaxTimeUnderMinTimeError(ContractError):
    message = "Max eviction time smaller than minimum eviction time."


class RewardSmallerThanFeeError(ContractError):
    message = "Job reward smaller than eviction fee."


class InvalidVariablesError(ContractError):
    message = "Invalid variables."


class VariablesContainDuplicatesError(ContractError):
    message = "Variables list contains duplicates."


class EvictionPeriodNotElapsedError(ContractError):
    message = "Eviction period not elapsed."


class VariablesMissingFromVectorError(ContractError):
    message = "Variables in condition or msgs missing from variables vector."


class ExcessVariablesInVectorError(ContractError):
    message = "Variable vector contains unused variables."


_WASM_CODES = (
    (28, "No such code ID."),
    (27, "Max query stack size exceeded."),
    (22, "No such contract at requested address."),
    (21, "Invalid event from contract."),
    (20, "Unknown message from the contract."),
    (19, "Unpinning contract failed."),
    (18, "Pinning contract failed."),
    (17, "Unsupported action for this contract."),
    (16, "Maximum IBC channels reached."),
    (15, "Content is duplicated."),
    (14, "Content is invalid in this context."),
    (13, "Content exceeds limit."),
    (12, "Empty content."),
    (11, "Migrate wasm contract failed."),
    (10, "Invalid CosmosMsg from the called contract."),
    (9, "Query wasm contract failed."),
    (8, "Entry not found in store."),
    (7, "Invalid genesis file."),
    (6, "Insufficient gas."),
    (
        5,
        "Execute wasm contract failed. Common causes include insufficient CW20 Funds, "
        "permission errors on CW721 assets, and malformed contract messages.",
    ),
    (4, "Instantiate wasm contract failed."),
    (3, "Contract account already exists."),
    (2, "Create wasm contract failed."),
)

_SDK_CODES = (
    (41, "Invalid gas limit."),
    (40, "Error in app.toml."),
    (39, "Internal IO error."),
    (38, "Not found: Entity does not exist in state."),
    (37, "Feature not supported."),
    (36, "Conflict error."),
    (35, "Internal logic error."),
    (34, "Failed unpacking protobuf msg."),
    (33, "Failed packing protobuf msg."),
    (32, "Incorrect account sequence."),
    (31, "Unknown extension options."),
    (30, "Tx timeout height."),
    (29, "Invalid type."),
    (28, "Invalid chain-id."),
    (27, "Invalid version."),
    (26, "invalid height."),
    (25, "Invalid gas adjustment."),
    (24, "Tx indended signer does not match the given signer."),
    (23, "Invalid account password."),
    (22, "Key not found."),
    (21, "Tx too large."),
    (20, "Mempool is full."),
    (19, "Tx already in mempool."),
    (18, "Invalid request."),
    (17, "Failed to unmarshal JSON bytes."),
    (16, "Failed to marshal JSON bytes."),
    (15, "No signatures supplied."),
    (14, "Maximum number of signatures exceeded."),
    (13, "Insufficient fee."),
    (12, "Memo too large."),
    (11, "Out of gas."),
    (10, "Invalid coins."),
    (9, "Unknown address."),
    (8, "Invalid pubkey."),
    (7, "Invalid address."),
    (6, "Unknown request."),
    (5, "Invalid funds. Ensure that sufficient native tokens are being supplied for the job."),
    (4, "Unauthorized SDK request."),
    (3, "Invalid sequence."),
    (2, "Tx parse error."),
)

_UNDEFINED = "Undefined error."


def map_contract_error(message: str) -> str:
    """Explain a chain error message by its module and error code."""
    if "wasm" in message:
        table = _WASM_CODES
    elif "sdk" in message:
        table = _SDK_CODES
    else:
        return _UNDEFINED
    return next(
        (text for code, text in table if f"code: {code}" in message),
        _UNDEFINED,
    )