from __future__ import annotations

from typing import Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from stockroom.config import get_config
from stockroom.databricks.auth import get_databricks_auth
from stockroom.errors import AuthenticationError
from stockroom.logging import get_logger


class CurrentUser(BaseModel):
    """The signed-in user every product query is scoped to."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(description="User identifier stored on products")
    display_name: str = Field(description="Name shown in the UI")
    source: Literal["header", "databricks", "config"] = Field(description="Where the identity came from")


def _display_name(user_id: str) -> str:
    base = user_id.split("@", 1)[0]
    pretty = base.replace(".", " ").replace("_", " ").strip()
    return pretty.title() if pretty else user_id


def _from_headers(headers: Optional[Mapping[str, str]], names) -> Optional[str]:
    if not headers:
        return None
    lowered = {k.lower(): v for k, v in headers.items()}
    for name in names:
        value = (lowered.get(name.lower()) or "").strip()
        if value:
            return value
    return None


def get_current_user(headers: Optional[Mapping[str, str]] = None) -> CurrentUser:
    """Resolve the current user.

    Order: identity headers forwarded by the app proxy, the Databricks identity
    when a workspace is configured, then `DEFAULT_USER_ID` for local development.

    Raises:
        AuthenticationError: If none of these yields an identity.
    """
    config = get_config()
    logger = get_logger(__name__)

    user_id = _from_headers(headers, config.identity_headers)
    if user_id:
        return CurrentUser(id=user_id, display_name=_display_name(user_id), source="header")

    auth = get_databricks_auth()
    if auth.is_configured():
        try:
            user_id = auth.get_current_user_name()
        except Exception as e:
            raise AuthenticationError(f"Could not resolve Databricks identity: {e}") from e
        if user_id:
            return CurrentUser(id=user_id, display_name=_display_name(user_id), source="databricks")

    if config.default_user_id:
        logger.debug("No forwarded identity; using DEFAULT_USER_ID")
        return CurrentUser(
            id=config.default_user_id,
            display_name=_display_name(config.default_user_id),
            source="config",
        )

    logger.warning("Request without identity headers and no fallback user configured")
    raise AuthenticationError("Not signed in.")
