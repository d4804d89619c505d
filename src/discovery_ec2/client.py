"""Build a boto3 EC2 client from a settings snapshot.

Credentials, client configuration and endpoint are each resolved on their
own and then handed to boto3. Creating the client performs no network
calls.
"""

import logging
from typing import Any, Optional

import boto3

from discovery_ec2.configuration import build_configuration
from discovery_ec2.credentials import StaticCredentialsProvider, build_credentials
from discovery_ec2.endpoint import find_endpoint, find_region
from discovery_ec2.settings import Settings

_logger = logging.getLogger(__name__)

# Signing region for an explicit endpoint when neither settings nor the
# session name one.
DEFAULT_SIGNING_REGION = "us-east-1"


def endpoint_url(endpoint: str, scheme: str) -> str:
    """Prefix ``endpoint`` with ``scheme`` unless it already carries one."""
    if "://" in endpoint:
        return endpoint
    return f"{scheme}://{endpoint}"


def create_client(settings: Settings, session: Optional[boto3.Session] = None) -> Any:
    """Create an EC2 client configured from ``settings``.

    Args:
        settings: The settings snapshot.
        session: Optional boto3 session to create the client from. If not
                 provided, a default session is created.

    Returns:
        A boto3 ``ec2`` client.
    """
    if session is None:
        session = boto3.Session()

    configuration = build_configuration(settings)
    client_kwargs: dict[str, Any] = {"config": configuration.to_botocore_config()}

    provider = build_credentials(settings)
    if isinstance(provider, StaticCredentialsProvider):
        credentials = provider.get_credentials()
        client_kwargs["aws_access_key_id"] = credentials.access_key
        client_kwargs["aws_secret_access_key"] = credentials.secret_key

    endpoint = find_endpoint(settings)
    if endpoint is not None:
        client_kwargs["endpoint_url"] = endpoint_url(endpoint, configuration.protocol.value)

    region = find_region(settings)
    if region is None and endpoint is not None:
        region = session.region_name or DEFAULT_SIGNING_REGION
    if region is not None:
        client_kwargs["region_name"] = region

    _logger.debug(
        "Creating ec2 client (endpoint=%s, region=%s)",
        client_kwargs.get("endpoint_url"),
        region,
    )
    return session.client("ec2", **client_kwargs)
