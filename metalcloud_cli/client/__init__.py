"""
Client — Remote management API adapter and resource models
"""

from .base import MetalCloudClient
from .jsonrpc import JsonRpcClient
from .models import (
    Model, SubnetPool, SubnetPoolUtilization, User, SwitchDevice,
    DriveArray, DriveArrayOperation, Drive, DriveOperatingSystem, DriveFilesystem,
    DriveCredentials, ISCSICredentials, VolumeTemplate, InstanceArray, Infrastructure,
    NetworkProfile, NetworkProfileVLAN, NetworkProfileSubnetPool, ExternalConnection, Secret,
)

__all__ = [
    'MetalCloudClient', 'JsonRpcClient',
    'Model', 'SubnetPool', 'SubnetPoolUtilization', 'User', 'SwitchDevice',
    'DriveArray', 'DriveArrayOperation', 'Drive', 'DriveOperatingSystem', 'DriveFilesystem',
    'DriveCredentials', 'ISCSICredentials', 'VolumeTemplate', 'InstanceArray', 'Infrastructure',
    'NetworkProfile', 'NetworkProfileVLAN', 'NetworkProfileSubnetPool', 'ExternalConnection', 'Secret',
]
