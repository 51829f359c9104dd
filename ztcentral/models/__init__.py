"""
Typed payloads of the ZeroTier Central API.
"""
from ztcentral.models.base import CentralModel
from ztcentral.models.member import Member, MemberConfig
from ztcentral.models.network import (
    IPRange,
    IPv4AssignMode,
    IPv6AssignMode,
    Network,
    NetworkConfig,
    NetworkDNS,
    NetworkPermissions,
    Route,
)
from ztcentral.models.user import APITokenRequest, RandomToken, Status, User

__all__ = [
    'APITokenRequest',
    'CentralModel',
    'IPRange',
    'IPv4AssignMode',
    'IPv6AssignMode',
    'Member',
    'MemberConfig',
    'Network',
    'NetworkConfig',
    'NetworkDNS',
    'NetworkPermissions',
    'RandomToken',
    'Route',
    'Status',
    'User',
]
