"""
Client — Abstraction over the remote management API

Commands talk to the control plane only through MetalCloudClient. Every
method is one remote operation; failures raise RemoteError with the
transport or API error as __cause__. No method retries.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from .models import (
    Drive, DriveArray, DriveArrayOperation, ExternalConnection, Infrastructure,
    InstanceArray, NetworkProfile, Secret, SubnetPool, SubnetPoolUtilization,
    SwitchDevice, User, VolumeTemplate,
)


class MetalCloudClient(ABC):
    """Abstract base for management API clients."""

    # -------------------------------------------------------------------------
    # Subnet pools
    # -------------------------------------------------------------------------

    @abstractmethod
    def subnet_pool_search(self, filter: str) -> List[SubnetPool]:
        """
        Search subnet pools.

        Args:
            filter: Search expression ("" or "*" for all)
        """
        pass

    @abstractmethod
    def subnet_pool_get(self, subnet_pool_id: int) -> SubnetPool:
        pass

    @abstractmethod
    def subnet_pool_create(self, subnet_pool: SubnetPool) -> SubnetPool:
        pass

    @abstractmethod
    def subnet_pool_delete(self, subnet_pool_id: int) -> None:
        pass

    @abstractmethod
    def subnet_pool_prefix_sizes_stats(self, subnet_pool_id: int) -> SubnetPoolUtilization:
        """Free/allocated prefix and address counts of a subnet pool."""
        pass

    @abstractmethod
    def user_get(self, user_id: int) -> User:
        pass

    @abstractmethod
    def switch_device_get(self, network_equipment_id: int, decrypt_passwd: bool = False) -> SwitchDevice:
        pass

    # -------------------------------------------------------------------------
    # Drive arrays
    # -------------------------------------------------------------------------

    @abstractmethod
    def drive_arrays(self, infrastructure_id: int) -> Dict[str, DriveArray]:
        """Drive arrays of an infrastructure, keyed by label."""
        pass

    @abstractmethod
    def drive_array_get(self, drive_array_id: int) -> DriveArray:
        pass

    @abstractmethod
    def drive_array_get_by_label(self, label: str) -> Optional[DriveArray]:
        pass

    @abstractmethod
    def drive_array_create(self, infrastructure_id: int, drive_array: DriveArray) -> DriveArray:
        pass

    @abstractmethod
    def drive_array_edit(self, drive_array_id: int, operation: DriveArrayOperation) -> DriveArray:
        pass

    @abstractmethod
    def drive_array_delete(self, drive_array_id: int) -> None:
        pass

    @abstractmethod
    def drive_array_drives(self, drive_array_id: int) -> Dict[str, Drive]:
        """Drives of a drive array, keyed by label."""
        pass

    @abstractmethod
    def volume_template_get(self, volume_template_id: int) -> VolumeTemplate:
        pass

    @abstractmethod
    def volume_template_get_by_label(self, label: str) -> Optional[VolumeTemplate]:
        pass

    @abstractmethod
    def instance_array_get(self, instance_array_id: int) -> InstanceArray:
        pass

    @abstractmethod
    def instance_array_get_by_label(self, label: str) -> Optional[InstanceArray]:
        pass

    @abstractmethod
    def infrastructure_get(self, infrastructure_id: int) -> Infrastructure:
        pass

    @abstractmethod
    def infrastructure_get_by_label(self, label: str) -> Optional[Infrastructure]:
        pass

    # -------------------------------------------------------------------------
    # Network profiles
    # -------------------------------------------------------------------------

    @abstractmethod
    def network_profiles(self, datacenter_name: str) -> Dict[int, NetworkProfile]:
        """Network profiles of a datacenter, keyed by ID."""
        pass

    @abstractmethod
    def network_profile_get(self, network_profile_id: int) -> NetworkProfile:
        pass

    @abstractmethod
    def network_profile_create(self, datacenter_name: str, network_profile: NetworkProfile) -> NetworkProfile:
        pass

    @abstractmethod
    def network_profile_delete(self, network_profile_id: int) -> None:
        pass

    @abstractmethod
    def instance_array_network_profile_set(
        self, instance_array_id: int, network_id: int, network_profile_id: int
    ) -> Dict[int, int]:
        """Attach a network profile to an instance array's network."""
        pass

    @abstractmethod
    def instance_array_network_profile_clear(self, instance_array_id: int, network_id: int) -> None:
        """Detach whatever network profile an instance array's network has."""
        pass

    @abstractmethod
    def external_connection_get(self, external_connection_id: int) -> ExternalConnection:
        pass

    # -------------------------------------------------------------------------
    # Secrets
    # -------------------------------------------------------------------------

    @abstractmethod
    def secrets(self, usage: Optional[str]) -> Dict[str, Secret]:
        """
        Secrets of the current user, keyed by name.

        Args:
            usage: Only secrets with this usage (None for all)
        """
        pass

    @abstractmethod
    def secret_get(self, secret_id: int) -> Secret:
        pass

    @abstractmethod
    def secret_create(self, secret: Secret) -> Secret:
        pass

    @abstractmethod
    def secret_delete(self, secret_id: int) -> None:
        pass
