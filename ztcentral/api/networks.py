"""
Network operations.
"""
from typing import List, Optional

from ztcentral.api.base import ResourceOperations, path_segment
from ztcentral.models.network import Network, NetworkConfig
from ztcentral.network.cancel import CancellationToken


class NetworkOperations(ResourceOperations):

    def get_networks(self, *, cancel: Optional[CancellationToken] = None) -> List[Network]:
        """Returns the networks available to the API token."""
        return self._call("GET", "/network", List[Network], cancel=cancel) or []

    def get_network(self, network_id: str, *, cancel: Optional[CancellationToken] = None) -> Network:
        return self._call("GET", f"/network/{path_segment(network_id)}", Network, cancel=cancel)

    def update_network(self, network: Network, *, cancel: Optional[CancellationToken] = None) -> Network:
        """
        Submits the fields set on ``network``.

        Only assigned fields are sent, so a model holding nothing but an id and
        a description updates just the description.

        Args:
            network: Network with its ID and the fields to change

        Returns:
            The network as stored after the update
        """
        network_id = network.network_id
        if not network_id:
            raise ValueError("network ID is required to update a network")
        return self._call("POST", f"/network/{path_segment(network_id)}", Network, network,
                          idempotent=True, cancel=cancel)

    def new_network(self, name: str, network: Optional[Network] = None, *,
                    cancel: Optional[CancellationToken] = None) -> Network:
        """
        Creates a network.

        Args:
            name: Name of the new network
            network: Optional template for the remaining settings; it is not modified

        Returns:
            The created network, including its assigned ID
        """
        if network is None:
            network = Network(config=NetworkConfig(name=name))
        else:
            network = network.model_copy(deep=True)
            if network.config is None:
                network.config = NetworkConfig(name=name)
            else:
                network.config.name = name
        # Each POST /network creates a new network
        return self._call("POST", "/network", Network, network, idempotent=False, cancel=cancel)

    def delete_network(self, network_id: str, *, cancel: Optional[CancellationToken] = None) -> None:
        self._call("DELETE", f"/network/{path_segment(network_id)}", cancel=cancel)
