"""
Models — Typed resources exchanged with the management API

Each model is a dataclass that decodes from and encodes to the API's
JSON objects. Python attribute names follow the API's snake_case keys;
where the API uses another key (network profiles use camelCase), the
field declares it with wire().

Keys the models don't know are ignored on decode.
"""

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def wire(key: str = None, default: Any = None, model: type = None, many: bool = False):
    """
    Declare a model field with wire metadata.

    Args:
        key: JSON key if it differs from the attribute name
        default: Default value (lists/dicts get a fresh copy per instance)
        model: Nested Model class for the value
        many: The value is a list of `model`
    """
    metadata = {"key": key, "model": model, "many": many}
    if many or isinstance(default, (list, dict)):
        factory = list if many or isinstance(default, list) else dict
        return field(default_factory=factory, metadata=metadata)
    return field(default=default, metadata=metadata)


class Model:
    """Base class for API models: dict decoding/encoding driven by dataclass fields."""

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]):
        """Decode from an API object. Returns None for None."""
        if data is None:
            return None
        kwargs = {}
        for f in dataclasses.fields(cls):
            key = f.metadata.get("key") or f.name
            if key not in data:
                continue
            value = data[key]
            nested = f.metadata.get("model")
            if nested is not None and value is not None:
                if f.metadata.get("many"):
                    value = [nested.from_dict(item) for item in value]
                else:
                    value = nested.from_dict(value)
            kwargs[f.name] = value
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Encode to an API object."""
        result = {}
        for f in dataclasses.fields(self):
            key = f.metadata.get("key") or f.name
            value = getattr(self, f.name)
            if isinstance(value, Model):
                value = value.to_dict()
            elif isinstance(value, list):
                value = [v.to_dict() if isinstance(v, Model) else v for v in value]
            result[key] = value
        return result


# =============================================================================
# Subnet pools
# =============================================================================

@dataclass
class SubnetPool(Model):
    subnet_pool_id: int = 0
    user_id: Optional[int] = None
    datacenter_name: str = ""
    subnet_pool_prefix_hex: str = ""
    subnet_pool_prefix_human_readable: str = ""
    subnet_pool_prefix_size: int = 0
    subnet_pool_type: str = ""
    subnet_pool_routable: bool = False
    subnet_pool_destination: str = ""
    subnet_pool_netmask_human_readable: str = ""
    subnet_pool_netmask_hex: str = ""
    network_equipment_id: Optional[int] = None
    subnet_pool_is_only_for_manual_allocation: bool = False
    subnet_pool_utilization_cached_json: str = ""
    subnet_pool_cached_updated_timestamp: str = ""

    @property
    def prefix(self) -> str:
        """Prefix in address/size notation."""
        return f"{self.subnet_pool_prefix_human_readable}/{self.subnet_pool_prefix_size}"


@dataclass
class SubnetPoolUtilization(Model):
    prefix_count_free: Dict[str, int] = wire(default={})
    prefix_count_allocated: Any = None
    ip_addresses_usable_count_free: str = ""
    ip_addresses_usable_count_allocated: Any = None
    ip_addresses_usable_free_percent_optimistic: str = ""


@dataclass
class User(Model):
    user_id: int = 0
    user_email: str = ""
    user_display_name: str = ""


@dataclass
class SwitchDevice(Model):
    network_equipment_id: int = 0
    network_equipment_identifier_string: str = ""
    datacenter_name: str = ""
    network_equipment_driver: str = ""


# =============================================================================
# Drive arrays
# =============================================================================

@dataclass
class Infrastructure(Model):
    infrastructure_id: int = 0
    infrastructure_label: str = ""
    datacenter_name: str = ""


@dataclass
class InstanceArray(Model):
    instance_array_id: int = 0
    instance_array_label: str = ""
    infrastructure_id: int = 0


@dataclass
class VolumeTemplate(Model):
    volume_template_id: int = 0
    volume_template_label: str = ""
    volume_template_display_name: str = ""


@dataclass
class DriveArrayOperation(Model):
    drive_array_id: int = 0
    drive_array_label: str = ""
    drive_array_storage_type: str = ""
    drive_array_count: int = 0
    drive_size_mbytes_default: int = 0
    drive_array_expand_with_instance_array: bool = True
    instance_array_id: Optional[int] = None
    volume_template_id: Optional[int] = None
    drive_array_deploy_type: str = ""
    drive_array_deploy_status: str = ""
    drive_array_change_id: int = 0


@dataclass
class DriveArray(Model):
    drive_array_id: int = 0
    drive_array_label: str = ""
    drive_array_storage_type: str = ""
    drive_array_count: int = 0
    drive_size_mbytes_default: int = 0
    drive_array_expand_with_instance_array: bool = True
    instance_array_id: Optional[int] = None
    volume_template_id: Optional[int] = None
    infrastructure_id: int = 0
    drive_array_service_status: str = ""
    drive_array_operation: Optional[DriveArrayOperation] = wire(model=DriveArrayOperation)


@dataclass
class DriveOperatingSystem(Model):
    operating_system_type: str = ""
    operating_system_version: str = ""


@dataclass
class DriveFilesystem(Model):
    drive_filesystem_type: str = ""
    drive_filesystem_block_size_bytes: int = 0


@dataclass
class ISCSICredentials(Model):
    storage_ip_address: str = ""
    storage_port: int = 0
    target_iqn: str = ""
    lun_id: int = 0


@dataclass
class DriveCredentials(Model):
    iscsi: Optional[ISCSICredentials] = wire(model=ISCSICredentials)


@dataclass
class Drive(Model):
    drive_id: int = 0
    drive_label: str = ""
    drive_service_status: str = ""
    drive_size_mbytes: int = 0
    drive_storage_type: str = ""
    instance_id: Optional[int] = None
    template_id_origin: Optional[int] = None
    drive_operating_system: Optional[DriveOperatingSystem] = wire(model=DriveOperatingSystem)
    drive_filesystem: Optional[DriveFilesystem] = wire(model=DriveFilesystem)
    drive_credentials: Optional[DriveCredentials] = wire(model=DriveCredentials)


# =============================================================================
# Network profiles
# =============================================================================

@dataclass
class ExternalConnection(Model):
    external_connection_id: int = 0
    external_connection_label: str = ""
    datacenter_name: str = ""


@dataclass
class NetworkProfileSubnetPool(Model):
    # None means the subnet is allocated automatically
    subnet_pool_id: Optional[int] = wire(key="subnetPoolID")
    subnet_pool_type: str = wire(key="subnetPoolType", default="")


@dataclass
class NetworkProfileVLAN(Model):
    # None means the VLAN is allocated automatically
    vlan_id: Optional[int] = wire(key="vlanID")
    port_mode: str = wire(key="portMode", default="")
    provision_subnet_gateways: bool = wire(key="provisionSubnetGateways", default=False)
    external_connection_ids: List[int] = wire(key="extConnectionIDs", default=[])
    subnet_pools: List[NetworkProfileSubnetPool] = wire(
        key="subnetPools", model=NetworkProfileSubnetPool, many=True
    )


@dataclass
class NetworkProfile(Model):
    network_profile_id: int = wire(key="id", default=0)
    network_profile_label: str = wire(key="label", default="")
    datacenter_name: str = wire(key="dc", default="")
    network_type: str = wire(key="networkType", default="")
    network_profile_vlans: List[NetworkProfileVLAN] = wire(
        key="vlans", model=NetworkProfileVLAN, many=True
    )
    network_profile_created_timestamp: str = wire(key="createdTimestamp", default="")
    network_profile_updated_timestamp: str = wire(key="updatedTimestamp", default="")


# =============================================================================
# Secrets
# =============================================================================

@dataclass
class Secret(Model):
    secret_id: int = 0
    user_id_owner: int = 0
    user_id_authenticated: int = 0
    secret_name: str = ""
    secret_usage: str = ""
    secret_base64: str = ""
    secret_created_timestamp: str = ""
    secret_updated_timestamp: str = ""
