"""
Resource operations of the ZeroTier Central API, combined into ``Client``.
"""
from ztcentral.api.members import MemberOperations
from ztcentral.api.networks import NetworkOperations
from ztcentral.api.users import UserOperations

__all__ = ['MemberOperations', 'NetworkOperations', 'UserOperations']
