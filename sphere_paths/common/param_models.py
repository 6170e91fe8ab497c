"""Pydantic parameter models for sphere_paths."""

from __future__ import annotations

import os
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

from sphere_paths.common import constants
from sphere_paths.common.precision import PrecisionContext
from sphere_paths.operators.interior_angle import ConnectionPolicy, connector_for_policy


class PrecisionParams(BaseModel):
    """Tolerance used for every geometric comparison."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    epsilon: float = Field(constants.DEFAULT_EPSILON, ge=0.0, allow_inf_nan=False)

    def context(self) -> PrecisionContext:
        return PrecisionContext(self.epsilon)


class ConnectorParams(BaseModel):
    """Arc connector settings."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    policy: ConnectionPolicy = ConnectionPolicy(constants.DEFAULT_CONNECTION_POLICY)
    precision: PrecisionParams = Field(default_factory=PrecisionParams)

    def build_connector(self):
        return connector_for_policy(self.policy)


def _load_yaml_file(path: str) -> Dict[str, Any]:
    """Load a YAML file, unwrapping a /**: ros__parameters: block if present."""
    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if "/**" in data and "ros__parameters" in data.get("/**", {}):
        return data["/**"]["ros__parameters"] or {}
    return data


def load_params(path: Optional[str] = None) -> ConnectorParams:
    """
    Load connector parameters from YAML.

    Args:
        path: YAML file; None returns the defaults

    Returns:
        Validated ConnectorParams

    Raises:
        FileNotFoundError: If path does not exist
        pydantic.ValidationError: If a value is invalid or a key is unknown
    """
    if path is None:
        return ConnectorParams()
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")
    return ConnectorParams.model_validate(_load_yaml_file(path))
