"""
Network member models.
"""
from typing import List, Optional, Tuple

from pydantic import Field

from ztcentral.models.base import CentralModel


class MemberConfig(CentralModel):
    active_bridge: Optional[bool] = Field(None, alias="activeBridge")
    authorized: Optional[bool] = None
    capabilities: Optional[List[int]] = None
    creation_time: Optional[int] = Field(None, alias="creationTime")
    # 10-digit node address, same as Member.member_id
    member_id: Optional[str] = Field(None, alias="id")
    identity: Optional[str] = None
    ip_assignments: Optional[List[str]] = Field(None, alias="ipAssignments")
    last_authorized_time: Optional[int] = Field(None, alias="lastAuthorizedTime")
    last_deauthorized_time: Optional[int] = Field(None, alias="lastDeauthorizedTime")
    no_auto_assign_ips: Optional[bool] = Field(None, alias="noAutoAssignIps")
    revision: Optional[int] = None
    # (tag id, tag value) pairs
    tags: Optional[List[Tuple[int, int]]] = None
    version_major: Optional[int] = Field(None, alias="vMajor")
    version_minor: Optional[int] = Field(None, alias="vMinor")
    version_rev: Optional[int] = Field(None, alias="vRev")
    version_protocol: Optional[int] = Field(None, alias="vProto")


class Member(CentralModel):
    """A member of a ZeroTier network."""
    # Deprecated "<networkId>-<nodeId>" identifier
    id: Optional[str] = None
    type: Optional[str] = None
    clock: Optional[int] = None
    network_id: Optional[str] = Field(None, alias="networkId")
    member_id: Optional[str] = Field(None, alias="nodeId")
    controller_id: Optional[str] = Field(None, alias="controllerId")
    hidden: Optional[bool] = None
    name: Optional[str] = None
    online: Optional[bool] = None
    description: Optional[str] = None
    config: Optional[MemberConfig] = None
    last_online: Optional[int] = Field(None, alias="lastOnline")
    physical_address: Optional[str] = Field(None, alias="physicalAddress")
    client_version: Optional[str] = Field(None, alias="clientVersion")
    protocol_version: Optional[int] = Field(None, alias="protocolVersion")
    supports_rules_engine: Optional[bool] = Field(None, alias="supportsRulesEngine")
