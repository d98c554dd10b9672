"""
metalcloud-cli — Operator CLI for a bare-metal cloud control plane

Create, list, edit and delete drive arrays, network profiles, secrets
and subnet pools from the command line.

Usage:
    metalcloud-cli subnet-pool list -datacenter uk-reading
    metalcloud-cli drive-array create -infra my-infra -ia web -label data
    metalcloud-cli network-profile get -id 12 -format yaml -raw
    metalcloud-cli secret delete -id ssh-key -autoconfirm
    metalcloud-cli help
"""

__version__ = "0.1.0"
