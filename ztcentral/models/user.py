"""
Account, status and API token models.
"""
from typing import Any, Dict, List, Optional

from pydantic import Field

from ztcentral.models.base import CentralModel


class User(CentralModel):
    id: Optional[str] = None
    type: Optional[str] = None
    clock: Optional[int] = None
    global_permissions: Optional[Dict[str, Any]] = Field(None, alias="globalPermissions")
    display_name: Optional[str] = Field(None, alias="displayName")
    email: Optional[str] = None
    auth: Optional[Dict[str, Any]] = None
    sms_number: Optional[str] = Field(None, alias="smsNumber")
    # Names of the user's API tokens
    tokens: Optional[List[str]] = None


class Status(CentralModel):
    """Response of the /status endpoint."""
    id: Optional[str] = None
    type: Optional[str] = None
    clock: Optional[int] = None
    version: Optional[str] = None
    api_version: Optional[str] = Field(None, alias="apiVersion")
    uptime: Optional[int] = None
    user: Optional[User] = None
    read_only_mode: Optional[bool] = Field(None, alias="readOnlyMode")
    login_methods: Optional[Dict[str, Any]] = Field(None, alias="loginMethods")


class APITokenRequest(CentralModel):
    token_name: Optional[str] = Field(None, alias="tokenName")
    token: Optional[str] = None


class RandomToken(CentralModel):
    token: Optional[str] = None
    clock: Optional[int] = None
    hex: Optional[str] = None
