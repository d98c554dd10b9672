"""
JsonRpcClient — MetalCloudClient over JSON-RPC 2.0 / HTTP

No external package required - uses stdlib urllib. One POST per call,
no retries. The API key is sent as-is in the Authorization header.
"""

import json
import logging
import urllib.error
import urllib.request
from typing import Any, Dict, List, Optional

from ..errors import RemoteError
from .base import MetalCloudClient
from .models import (
    Drive, DriveArray, DriveArrayOperation, ExternalConnection, Infrastructure,
    InstanceArray, NetworkProfile, Secret, SubnetPool, SubnetPoolUtilization,
    SwitchDevice, User, VolumeTemplate,
)

logger = logging.getLogger(__name__)


def _values(result: Any) -> List[Any]:
    """Entries of a list result, or values of a dict-keyed result."""
    if result is None:
        return []
    if isinstance(result, dict):
        return list(result.values())
    return list(result)


class JsonRpcClient(MetalCloudClient):
    """
    JSON-RPC client for the management API.

    Args:
        endpoint: API URL
        api_key: API key, passed through opaquely
        user_email: Account the per-user calls (secrets) act for
        timeout: Socket timeout in seconds (None = library default)
    """

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        user_email: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        self.endpoint = endpoint
        self.api_key = api_key
        self.user_email = user_email
        self.timeout = timeout
        self._request_id = 0

    def call(self, method: str, *params: Any) -> Any:
        """
        Perform one JSON-RPC call and return its result.

        Raises:
            RemoteError: Transport failure, HTTP error, malformed response
                         or a JSON-RPC error member
        """
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": [self._encode(p) for p in params],
        }

        data = json.dumps(payload).encode('utf-8')
        headers = {
            'Content-Type': 'application/json',
            'Authorization': f'Bearer {self.api_key}',
        }
        req = urllib.request.Request(self.endpoint, data=data, headers=headers, method='POST')

        logger.debug("JSON-RPC call %s (id %d)", method, self._request_id)

        kwargs = {} if self.timeout is None else {"timeout": self.timeout}
        try:
            with urllib.request.urlopen(req, **kwargs) as response:
                body = json.loads(response.read().decode('utf-8'))
        except urllib.error.HTTPError as e:
            raise RemoteError(
                f"{method} failed: HTTP {e.code} {e.reason}", method=method, code=e.code
            ) from e
        except urllib.error.URLError as e:
            raise RemoteError(
                f"Cannot connect to {self.endpoint}: {e.reason}", method=method
            ) from e
        except json.JSONDecodeError as e:
            raise RemoteError(f"Invalid response to {method}: {e}", method=method) from e

        if not isinstance(body, dict):
            raise RemoteError(f"Invalid response to {method}: not a JSON-RPC object", method=method)

        error = body.get("error")
        if error:
            message = error.get("message", "unknown error") if isinstance(error, dict) else str(error)
            code = error.get("code") if isinstance(error, dict) else None
            logger.debug("JSON-RPC call %s returned error %s", method, code)
            raise RemoteError(message, method=method, code=code)

        return body.get("result")

    @staticmethod
    def _encode(value: Any) -> Any:
        if hasattr(value, "to_dict"):
            return value.to_dict()
        return value

    # -------------------------------------------------------------------------
    # Subnet pools
    # -------------------------------------------------------------------------

    def subnet_pool_search(self, filter: str) -> List[SubnetPool]:
        result = self.call("subnet_pool_search", filter)
        return [SubnetPool.from_dict(item) for item in _values(result)]

    def subnet_pool_get(self, subnet_pool_id: int) -> SubnetPool:
        return SubnetPool.from_dict(self.call("subnet_pool_get", subnet_pool_id))

    def subnet_pool_create(self, subnet_pool: SubnetPool) -> SubnetPool:
        return SubnetPool.from_dict(self.call("subnet_pool_create", subnet_pool))

    def subnet_pool_delete(self, subnet_pool_id: int) -> None:
        self.call("subnet_pool_delete", subnet_pool_id)

    def subnet_pool_prefix_sizes_stats(self, subnet_pool_id: int) -> SubnetPoolUtilization:
        return SubnetPoolUtilization.from_dict(
            self.call("subnet_pool_prefix_sizes_stats", subnet_pool_id)
        )

    def user_get(self, user_id: int) -> User:
        return User.from_dict(self.call("user_get", user_id))

    def switch_device_get(self, network_equipment_id: int, decrypt_passwd: bool = False) -> SwitchDevice:
        return SwitchDevice.from_dict(
            self.call("switch_device_get", network_equipment_id, decrypt_passwd)
        )

    # -------------------------------------------------------------------------
    # Drive arrays
    # -------------------------------------------------------------------------

    def drive_arrays(self, infrastructure_id: int) -> Dict[str, DriveArray]:
        arrays = [DriveArray.from_dict(item) for item in _values(self.call("drive_arrays", infrastructure_id))]
        return {da.drive_array_label: da for da in arrays}

    def drive_array_get(self, drive_array_id: int) -> DriveArray:
        return DriveArray.from_dict(self.call("drive_array_get", drive_array_id))

    def drive_array_get_by_label(self, label: str) -> Optional[DriveArray]:
        return DriveArray.from_dict(self.call("drive_array_get", label))

    def drive_array_create(self, infrastructure_id: int, drive_array: DriveArray) -> DriveArray:
        return DriveArray.from_dict(self.call("drive_array_create", infrastructure_id, drive_array))

    def drive_array_edit(self, drive_array_id: int, operation: DriveArrayOperation) -> DriveArray:
        return DriveArray.from_dict(self.call("drive_array_edit", drive_array_id, operation))

    def drive_array_delete(self, drive_array_id: int) -> None:
        self.call("drive_array_delete", drive_array_id)

    def drive_array_drives(self, drive_array_id: int) -> Dict[str, Drive]:
        drives = [Drive.from_dict(item) for item in _values(self.call("drive_array_drives", drive_array_id))]
        return {d.drive_label: d for d in drives}

    def volume_template_get(self, volume_template_id: int) -> VolumeTemplate:
        return VolumeTemplate.from_dict(self.call("volume_template_get", volume_template_id))

    def volume_template_get_by_label(self, label: str) -> Optional[VolumeTemplate]:
        return VolumeTemplate.from_dict(self.call("volume_template_get", label))

    def instance_array_get(self, instance_array_id: int) -> InstanceArray:
        return InstanceArray.from_dict(self.call("instance_array_get", instance_array_id))

    def instance_array_get_by_label(self, label: str) -> Optional[InstanceArray]:
        return InstanceArray.from_dict(self.call("instance_array_get", label))

    def infrastructure_get(self, infrastructure_id: int) -> Infrastructure:
        return Infrastructure.from_dict(self.call("infrastructure_get", infrastructure_id))

    def infrastructure_get_by_label(self, label: str) -> Optional[Infrastructure]:
        return Infrastructure.from_dict(self.call("infrastructure_get", label))

    # -------------------------------------------------------------------------
    # Network profiles
    # -------------------------------------------------------------------------

    def network_profiles(self, datacenter_name: str) -> Dict[int, NetworkProfile]:
        profiles = [NetworkProfile.from_dict(item) for item in _values(self.call("network_profiles", datacenter_name))]
        return {p.network_profile_id: p for p in profiles}

    def network_profile_get(self, network_profile_id: int) -> NetworkProfile:
        return NetworkProfile.from_dict(self.call("network_profile_get", network_profile_id))

    def network_profile_create(self, datacenter_name: str, network_profile: NetworkProfile) -> NetworkProfile:
        return NetworkProfile.from_dict(
            self.call("network_profile_create", datacenter_name, network_profile)
        )

    def network_profile_delete(self, network_profile_id: int) -> None:
        self.call("network_profile_delete", network_profile_id)

    def instance_array_network_profile_set(
        self, instance_array_id: int, network_id: int, network_profile_id: int
    ) -> Dict[int, int]:
        result = self.call(
            "instance_array_network_profile_set", instance_array_id, network_id, network_profile_id
        )
        return {int(k): v for k, v in (result or {}).items()}

    def instance_array_network_profile_clear(self, instance_array_id: int, network_id: int) -> None:
        self.call("instance_array_network_profile_clear", instance_array_id, network_id)

    def external_connection_get(self, external_connection_id: int) -> ExternalConnection:
        return ExternalConnection.from_dict(
            self.call("external_connection_get", external_connection_id)
        )

    # -------------------------------------------------------------------------
    # Secrets
    # -------------------------------------------------------------------------

    def secrets(self, usage: Optional[str]) -> Dict[str, Secret]:
        secrets = [Secret.from_dict(item) for item in _values(self.call("secrets", self.user_email, usage))]
        return {s.secret_name: s for s in secrets}

    def secret_get(self, secret_id: int) -> Secret:
        return Secret.from_dict(self.call("secret_get", secret_id))

    def secret_create(self, secret: Secret) -> Secret:
        return Secret.from_dict(self.call("secret_create", self.user_email, secret))

    def secret_delete(self, secret_id: int) -> None:
        self.call("secret_delete", secret_id)
