"""
Tests for the pydantic parameter models and YAML loading.
"""

import pytest
from pydantic import ValidationError

from sphere_paths.common.constants import DEFAULT_EPSILON
from sphere_paths.common.param_models import ConnectorParams, PrecisionParams, load_params
from sphere_paths.common.precision import PrecisionContext
from sphere_paths.operators.arc_connector import ArcConnector
from sphere_paths.operators.interior_angle import ConnectionPolicy, InteriorAngleArcConnector


class TestPrecisionParams:
    """Precision configuration."""

    def test_defaults(self):
        params = PrecisionParams()
        assert params.epsilon == DEFAULT_EPSILON
        assert params.context() == PrecisionContext(DEFAULT_EPSILON)

    def test_rejects_negative(self):
        with pytest.raises(ValidationError):
            PrecisionParams(epsilon=-1.0)

    def test_rejects_nan(self):
        with pytest.raises(ValidationError):
            PrecisionParams(epsilon=float("nan"))

    def test_validate_assignment(self):
        params = PrecisionParams()
        with pytest.raises(ValidationError):
            params.epsilon = -1e-3


class TestConnectorParams:
    """Connector configuration."""

    def test_defaults(self):
        params = ConnectorParams()
        assert params.policy == "first"
        assert type(params.build_connector()) is ArcConnector

    def test_policy_selects_connector(self):
        connector = ConnectorParams(policy="minimize").build_connector()
        assert isinstance(connector, InteriorAngleArcConnector)
        assert not connector.is_maximizing

    def test_unknown_policy_rejected(self):
        with pytest.raises(ValidationError):
            ConnectorParams(policy="largest")

    def test_policy_is_enum(self):
        params = ConnectorParams(policy="maximize")
        assert params.policy is ConnectionPolicy.MAXIMIZE
        assert ConnectorParams().policy is ConnectionPolicy.FIRST
        assert params.build_connector().is_maximizing

    def test_policy_assignment_validated(self):
        params = ConnectorParams()
        params.policy = "minimize"
        assert params.policy is ConnectionPolicy.MINIMIZE
        with pytest.raises(ValidationError):
            params.policy = "largest"

    def test_extra_keys_forbidden(self):
        with pytest.raises(ValidationError):
            ConnectorParams(policy="first", tolerance=1e-3)


class TestLoadParams:
    """YAML loading."""

    def test_none_gives_defaults(self):
        assert load_params(None) == ConnectorParams()

    def test_load_file(self, config_file):
        params = load_params(config_file)
        assert params.policy == "maximize"
        assert params.policy is ConnectionPolicy.MAXIMIZE
        assert params.precision.epsilon == pytest.approx(1e-6)
        assert params.precision.context().epsilon == pytest.approx(1e-6)

    def test_ros_parameters_wrapper(self, tmp_path):
        path = tmp_path / "wrapped.yaml"
        path.write_text(
            "/**:\n"
            "  ros__parameters:\n"
            "    policy: minimize\n"
        )
        params = load_params(str(path))
        assert params.policy == "minimize"
        assert params.precision.epsilon == DEFAULT_EPSILON

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_params(str(path)) == ConnectorParams()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_params(str(tmp_path / "nope.yaml"))

    def test_unknown_key_in_file(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("policy: first\nthreshold: 3\n")
        with pytest.raises(ValidationError):
            load_params(str(path))

    def test_repo_config_loads(self, repo_config_path):
        params = load_params(repo_config_path)
        assert params.policy == "first"
        assert params.precision.epsilon == DEFAULT_EPSILON


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
