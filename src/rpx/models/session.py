"""Per-run operator input and provisioning state."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class SessionInput(BaseModel):
    """Validated answers collected from the operator."""

    domain: str
    port: int
    ssl: bool = False


class ProvisionState(str, Enum):
    START = "start"
    INPUT_COLLECTED = "input_collected"
    HTTP_CONFIG_ACTIVE = "http_config_active"
    TLS_REQUESTED = "tls_requested"
    TLS_CONFIG_ACTIVE = "tls_config_active"
    DONE = "done"


# Forward-only transitions; anything else is a programming error.
TRANSITIONS: dict[ProvisionState, frozenset[ProvisionState]] = {
    ProvisionState.START: frozenset({ProvisionState.INPUT_COLLECTED}),
    ProvisionState.INPUT_COLLECTED: frozenset({ProvisionState.HTTP_CONFIG_ACTIVE}),
    ProvisionState.HTTP_CONFIG_ACTIVE: frozenset({ProvisionState.TLS_REQUESTED, ProvisionState.DONE}),
    ProvisionState.TLS_REQUESTED: frozenset({ProvisionState.TLS_CONFIG_ACTIVE}),
    ProvisionState.TLS_CONFIG_ACTIVE: frozenset({ProvisionState.DONE}),
    ProvisionState.DONE: frozenset(),
}
