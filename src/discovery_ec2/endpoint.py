"""EC2 endpoint resolution.

An explicit ``endpoint`` setting always wins and is returned verbatim.
Otherwise the ``region`` setting is mapped through :data:`REGIONS` to a
canonical region and the endpoint host is derived from it. With neither
set, ``None`` is returned and the AWS SDK picks its own endpoint.
"""

import logging
from typing import Optional

from discovery_ec2.errors import InvalidRegionError
from discovery_ec2.settings import AWS, EC2, Settings, resolve_setting

_logger = logging.getLogger(__name__)

# Region code or short alias -> canonical region.
REGIONS: dict[str, str] = {
    "us-east": "us-east-1",
    "us-east-1": "us-east-1",
    "us-east-2": "us-east-2",
    "us-west": "us-west-1",
    "us-west-1": "us-west-1",
    "us-west-2": "us-west-2",
    "us-gov-west": "us-gov-west-1",
    "us-gov-west-1": "us-gov-west-1",
    "ca-central": "ca-central-1",
    "ca-central-1": "ca-central-1",
    "sa-east": "sa-east-1",
    "sa-east-1": "sa-east-1",
    "eu-west": "eu-west-1",
    "eu-west-1": "eu-west-1",
    "eu-west-2": "eu-west-2",
    "eu-central": "eu-central-1",
    "eu-central-1": "eu-central-1",
    "ap-south-1": "ap-south-1",
    "ap-southeast": "ap-southeast-1",
    "ap-southeast-1": "ap-southeast-1",
    "ap-southeast-2": "ap-southeast-2",
    "ap-northeast": "ap-northeast-1",
    "ap-northeast-1": "ap-northeast-1",
    "ap-northeast-2": "ap-northeast-2",
    "cn-north": "cn-north-1",
    "cn-north-1": "cn-north-1",
}


def endpoint_for_region(region: str) -> str:
    """Return the EC2 endpoint host for a region code or alias.

    Raises:
        InvalidRegionError: If ``region`` is not in :data:`REGIONS`.
    """
    canonical = REGIONS.get(region)
    if canonical is None:
        raise InvalidRegionError(region)
    if canonical.startswith("cn-"):
        return f"ec2.{canonical}.amazonaws.com.cn"
    return f"ec2.{canonical}.amazonaws.com"


def find_region(settings: Settings) -> Optional[str]:
    """Return the configured region, canonicalised when it is a known alias.

    Unknown regions are returned unchanged; only endpoint derivation
    rejects them.
    """
    region = resolve_setting(settings, AWS.REGION, EC2.REGION)
    if region is None:
        return None
    return REGIONS.get(region, region)


def find_endpoint(settings: Settings) -> Optional[str]:
    """Return the EC2 endpoint for the given settings, or None for the SDK default.

    Raises:
        InvalidRegionError: If no endpoint is set and the region is unknown.
    """
    endpoint = resolve_setting(settings, AWS.ENDPOINT, EC2.ENDPOINT)
    if endpoint is not None:
        _logger.debug("Using explicit ec2 endpoint [%s]", endpoint)
        return endpoint

    region = resolve_setting(settings, AWS.REGION, EC2.REGION)
    if region is None:
        return None

    endpoint = endpoint_for_region(region)
    _logger.debug("Using ec2 region [%s], with endpoint [%s]", region, endpoint)
    return endpoint
