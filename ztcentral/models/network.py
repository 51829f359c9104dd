"""
Network models.
"""
from typing import Any, Dict, List, Optional

from pydantic import Field

from ztcentral.models.base import CentralModel


class IPRange(CentralModel):
    """A range of IPv4 or IPv6 addresses, from start to end inclusive."""
    start: Optional[str] = Field(None, alias="ipRangeStart")
    end: Optional[str] = Field(None, alias="ipRangeEnd")


class Route(CentralModel):
    """A managed route published to network members."""
    target: Optional[str] = None
    via: Optional[str] = None


class NetworkDNS(CentralModel):
    domain: Optional[str] = None
    # Up to 4 addresses
    servers: Optional[List[str]] = None


class IPv4AssignMode(CentralModel):
    # Assign addresses from the IPv4 auto-assign pools
    zt: Optional[bool] = None


class IPv6AssignMode(CentralModel):
    # 6PLANE: a private /40 per network, with the member address in the low bits
    six_plane: Optional[bool] = Field(None, alias="6plane")
    # A unique /128 per device
    rfc4193: Optional[bool] = None
    # Assign addresses from the IPv6 auto-assign pools
    zt: Optional[bool] = None


class NetworkPermissions(CentralModel):
    authorize: Optional[bool] = Field(None, alias="a")
    delete: Optional[bool] = Field(None, alias="d")
    modify: Optional[bool] = Field(None, alias="m")
    read: Optional[bool] = Field(None, alias="r")


class NetworkConfig(CentralModel):
    """Configuration options of a network."""
    creation_time: Optional[int] = Field(None, alias="creationTime")
    capabilities: Optional[List[Any]] = None
    enable_broadcast: Optional[bool] = Field(None, alias="enableBroadcast")
    id: Optional[str] = None
    ip_assignment_pools: Optional[List[IPRange]] = Field(None, alias="ipAssignmentPools")
    last_modified: Optional[int] = Field(None, alias="lastModified")
    mtu: Optional[int] = None
    # Setting this to 0 disables IPv4 communication on the network
    multicast_limit: Optional[int] = Field(None, alias="multicastLimit")
    name: Optional[str] = None
    # Members of a public network are authorized automatically
    private: Optional[bool] = None
    revision: Optional[int] = None
    routes: Optional[List[Route]] = None
    rules: Optional[List[Any]] = None
    tags: Optional[List[Any]] = None
    v4_assign_mode: Optional[IPv4AssignMode] = Field(None, alias="v4AssignMode")
    v6_assign_mode: Optional[IPv6AssignMode] = Field(None, alias="v6AssignMode")
    dns: Optional[NetworkDNS] = None


class Network(CentralModel):
    """
    A ZeroTier network.

    ``id``, ``type``, ``clock``, ``owner_id`` and the member counts are
    read-only; the API ignores them on update.
    """
    id: Optional[str] = None
    type: Optional[str] = None
    clock: Optional[int] = None
    config: Optional[NetworkConfig] = None
    description: Optional[str] = None
    rules_source: Optional[str] = Field(None, alias="rulesSource")
    # Central user ID -> permissions
    permissions: Optional[Dict[str, NetworkPermissions]] = None
    owner_id: Optional[str] = Field(None, alias="ownerId")
    online_member_count: Optional[int] = Field(None, alias="onlineMemberCount")
    authorized_member_count: Optional[int] = Field(None, alias="authorizedMemberCount")
    total_member_count: Optional[int] = Field(None, alias="totalMemberCount")
    capabilities_by_name: Optional[Dict[str, Any]] = Field(None, alias="capabilitiesByName")
    tags_by_name: Optional[Dict[str, Any]] = Field(None, alias="tagsByName")

    @property
    def network_id(self) -> Optional[str]:
        """The network ID, from the top level or the config object."""
        if self.id:
            return self.id
        return self.config.id if self.config is not None else None
