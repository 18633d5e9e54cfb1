from typing import Optional
from databricks.sdk import WorkspaceClient
from stockroom.config import get_config
from stockroom.logging import get_logger

class DatabricksAuthentication:
    """Resolves the signed-in Databricks identity for the app, using the AppConfig singleton."""
    def __init__(self) -> None:
        self.config = get_config()
        self.logger = get_logger(__name__)

    def is_configured(self) -> bool:
        """True when a workspace host is configured."""
        return bool(self.config.databricks_host)

    def get_databricks_config(self):
        """Creates a Databricks SDK Config object from AppConfig values.

        Returns:
            DatabricksConfig: The Databricks SDK config object.
        Raises:
            RuntimeError: If required configuration is missing.
        """
        from databricks.sdk.core import Config as DatabricksConfig
        if not self.config.databricks_host:
            self.logger.error("Missing Databricks host; cannot build SDK config.")
            raise RuntimeError("Missing Databricks configuration values.")
        if self.config.databricks_client_id and self.config.databricks_client_secret:
            self.logger.info("Using Databricks service principal credentials")
            return DatabricksConfig(
                host=self.config.databricks_host,
                client_id=self.config.databricks_client_id,
                client_secret=self.config.databricks_client_secret,
            )
        if self.config.databricks_token:
            self.logger.info("Using Databricks personal access token")
            return DatabricksConfig(
                host=self.config.databricks_host,
                token=self.config.databricks_token,
            )
        self.logger.info("Using Databricks CLI credentials")
        return DatabricksConfig(host=self.config.databricks_host)

    def get_workspace_client(self) -> WorkspaceClient:
        """Returns an authenticated Databricks WorkspaceClient."""
        return WorkspaceClient(config=self.get_databricks_config())

    def get_current_user_name(self) -> Optional[str]:
        """User name (usually an email) of the identity the SDK is authenticated as.

        Returns None when the workspace reports no user name.
        """
        me = self.get_workspace_client().current_user.me()
        self.logger.debug(f"Databricks identity resolved: {me.user_name}")
        return me.user_name or None

def get_databricks_auth() -> DatabricksAuthentication:
    """Returns a new DatabricksAuthentication instance using the latest config."""
    return DatabricksAuthentication()
