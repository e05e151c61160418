"""Controller configuration updates."""

from __future__ import annotations

import dataclasses

from .controller import validate_config
from .errors import UnauthorizedError
from .models import Config, UpdateConfigMsg
from .runtime import Deps, Env, MessageInfo, Response
from .state import CONFIG


def update_config(deps: Deps, env: Env, info: MessageInfo, data: UpdateConfigMsg) -> Response:
    """Apply the given configuration changes; only the owner may do so."""
    config: Config = CONFIG.load(deps.storage)
    if info.sender != config.owner:
        raise UnauthorizedError()

    def pick(new, old):
        return old if new is None else new

    config = dataclasses.replace(
        config,
        owner=config.owner if data.owner is None else deps.api.addr_validate(data.owner),
        fee_collector=(
            config.fee_collector
            if data.fee_collector is None
            else deps.api.addr_validate(data.fee_collector)
        ),
        minimum_reward=pick(data.minimum_reward, config.minimum_reward),
        creation_fee_percentage=pick(
            data.creation_fee_percentage, config.creation_fee_percentage
        ),
        cancellation_fee_percentage=pick(
            data.cancellation_fee_percentage, config.cancellation_fee_percentage
        ),
        a_max=pick(data.a_max, config.a_max),
        a_min=pick(data.a_min, config.a_min),
        t_max=pick(data.t_max, config.t_max),
        t_min=pick(data.t_min, config.t_min),
        q_max=pick(data.q_max, config.q_max),
    )

    validate_config(config)
    CONFIG.save(deps.storage, config)

    return (
        Response()
        .add_attribute("action", "update_config")
        .add_attribute("config_owner", config.owner)
        .add_attribute("config_minimum_reward", config.minimum_reward)
        .add_attribute("config_creation_fee_percentage", config.creation_fee_percentage)
        .add_attribute("config_cancellation_fee_percentage", config.cancellation_fee_percentage)
        .add_attribute("config_a_max", config.a_max)
        .add_attribute("config_a_min", config.a_min)
        .add_attribute("config_t_max", config.t_max)
        .add_attribute("config_t_min", config.t_min)
        .add_attribute("config_q_max", config.q_max)
    )