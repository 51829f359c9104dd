"""
Network member operations.
"""
from typing import List, Optional

from ztcentral.api.base import ResourceOperations, path_segment
from ztcentral.models.member import Member, MemberConfig
from ztcentral.network.cancel import CancellationToken


def _member_path(network_id: str, member_id: str) -> str:
    return f"/network/{path_segment(network_id)}/member/{path_segment(member_id)}"


class MemberOperations(ResourceOperations):

    def get_members(self, network_id: str, *, cancel: Optional[CancellationToken] = None) -> List[Member]:
        return self._call("GET", f"/network/{path_segment(network_id)}/member", List[Member], cancel=cancel) or []

    def get_member(self, network_id: str, member_id: str, *,
                   cancel: Optional[CancellationToken] = None) -> Member:
        return self._call("GET", _member_path(network_id, member_id), Member, cancel=cancel)

    def update_member(self, member: Member, *, cancel: Optional[CancellationToken] = None) -> Member:
        """
        Submits the fields set on ``member``.

        Args:
            member: Member carrying ``network_id``, ``member_id`` and the fields to change

        Returns:
            The member as stored after the update
        """
        if not member.network_id or not member.member_id:
            raise ValueError("network ID and member ID are required to update a member")
        return self._call("POST", _member_path(member.network_id, member.member_id), Member, member,
                          idempotent=True, cancel=cancel)

    def create_authorized_member(self, network_id: str, member_id: str, name: str, *,
                                 cancel: Optional[CancellationToken] = None) -> Member:
        """Adds ``member_id`` to the network as an authorized member named ``name``."""
        member = Member(
            id=f"{network_id}-{member_id}",
            network_id=network_id,
            member_id=member_id,
            name=name,
            config=MemberConfig(authorized=True),
        )
        return self._call("POST", _member_path(network_id, member_id), Member, member,
                          idempotent=True, cancel=cancel)

    def _set_authorized(self, network_id: str, member_id: str, authorized: bool,
                        cancel: Optional[CancellationToken]) -> Member:
        member = Member(config=MemberConfig(authorized=authorized))
        return self._call("POST", _member_path(network_id, member_id), Member, member,
                          idempotent=True, cancel=cancel)

    def authorize_member(self, network_id: str, member_id: str, *,
                         cancel: Optional[CancellationToken] = None) -> Member:
        return self._set_authorized(network_id, member_id, True, cancel)

    def deauthorize_member(self, network_id: str, member_id: str, *,
                           cancel: Optional[CancellationToken] = None) -> Member:
        return self._set_authorized(network_id, member_id, False, cancel)

    def delete_member(self, member: Member, *, cancel: Optional[CancellationToken] = None) -> None:
        if not member.network_id or not member.member_id:
            raise ValueError("network ID and member ID are required to delete a member")
        self._call("DELETE", _member_path(member.network_id, member.member_id), cancel=cancel)

    def delete_member_by_id(self, network_id: str, member_id: str, *,
                            cancel: Optional[CancellationToken] = None) -> None:
        self.delete_member(Member(network_id=network_id, member_id=member_id), cancel=cancel)
