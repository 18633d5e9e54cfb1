import pytest
from types import SimpleNamespace
from stockroom.databricks.auth import DatabricksAuthentication
from stockroom.config import set_config_for_test

class MockDatabricksConfig:
    def __init__(self, host=None, token=None, client_id=None, client_secret=None):
        self.host = host
        self.token = token
        self.client_id = client_id
        self.client_secret = client_secret

class MockWorkspaceClient:
    user_name = "jane.doe@example.com"

    def __init__(self, config=None):
        self.config = config
        self.current_user = SimpleNamespace(me=lambda: SimpleNamespace(user_name=MockWorkspaceClient.user_name))

@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    for var in [
        "DATABRICKS_HOST", "DATABRICKS_TOKEN", "DATABRICKS_CLIENT_ID", "DATABRICKS_CLIENT_SECRET",
    ]:
        monkeypatch.delenv(var, raising=False)

@pytest.fixture(autouse=True)
def patch_sdk(monkeypatch):
    monkeypatch.setattr("databricks.sdk.core.Config", MockDatabricksConfig)
    monkeypatch.setattr("stockroom.databricks.auth.WorkspaceClient", MockWorkspaceClient)
    yield

def test_service_principal():
    """Service principal credentials win over a token."""
    set_config_for_test(
        databricks_host="https://test.cloud.databricks.com",
        databricks_client_id="client-id",
        databricks_client_secret="client-secret",
        databricks_token="token-123",
    )
    config = DatabricksAuthentication().get_databricks_config()
    assert config.client_id == "client-id"
    assert config.client_secret == "client-secret"
    assert config.host == "https://test.cloud.databricks.com"
    assert config.token is None

def test_manual_token():
    set_config_for_test(
        databricks_host="https://test.cloud.databricks.com",
        databricks_token="token-123",
    )
    config = DatabricksAuthentication().get_databricks_config()
    assert config.token == "token-123"
    assert config.client_id is None

def test_cli():
    """Host only falls back to CLI credentials."""
    set_config_for_test(databricks_host="https://test.cloud.databricks.com")
    auth = DatabricksAuthentication()
    assert auth.is_configured()
    config = auth.get_databricks_config()
    assert config.host == "https://test.cloud.databricks.com"
    assert config.token is None

def test_missing_config():
    set_config_for_test(databricks_host=None, databricks_token="token-123")
    auth = DatabricksAuthentication()
    assert not auth.is_configured()
    with pytest.raises(RuntimeError):
        auth.get_databricks_config()

def test_current_user_name():
    set_config_for_test(databricks_host="https://test.cloud.databricks.com", databricks_token="t")
    assert DatabricksAuthentication().get_current_user_name() == "jane.doe@example.com"

def test_current_user_name_empty(monkeypatch):
    set_config_for_test(databricks_host="https://test.cloud.databricks.com", databricks_token="t")
    monkeypatch.setattr(MockWorkspaceClient, "user_name", "")
    assert DatabricksAuthentication().get_current_user_name() is None
