"""
Shared fixtures for orchestration tests.
"""

import pytest

from config import reset_config
from tenancy import set_root_tenant


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point configuration at an empty directory and reset cached state."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv("ORCHESTRATION_CONFIG_DIR", str(config_dir))
    for env_var in [
        "ORCHESTRATION_REGION",
        "ORCHESTRATION_PROFILE",
        "ORCHESTRATION_LOG_LEVEL",
        "ORCHESTRATION_ROOT_TENANT",
    ]:
        monkeypatch.delenv(env_var, raising=False)

    reset_config()
    set_root_tenant(None)
    yield config_dir
    reset_config()
    set_root_tenant(None)


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake AWS credentials for moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
