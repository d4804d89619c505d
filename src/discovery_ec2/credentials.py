"""Credential resolution for EC2 discovery.

An access key and secret key are looked up in both tiers, the EC2 tier
winning. When both halves of the pair resolve, a static provider is
returned. Otherwise the botocore default credential chain (environment
variables, shared credentials/config files, container and instance
metadata) is used as-is.
"""

import logging
from typing import Optional, Protocol, runtime_checkable

import boto3
from botocore.credentials import Credentials

from discovery_ec2.settings import AWS, EC2, Settings, resolve_setting

_logger = logging.getLogger(__name__)


@runtime_checkable
class CredentialsProvider(Protocol):
    def get_credentials(self) -> Optional[Credentials]: ...


class StaticCredentialsProvider:
    """Always yields the same access key / secret key pair."""

    def __init__(self, access_key: str, secret_key: str):
        self._credentials = Credentials(access_key, secret_key)

    def get_credentials(self) -> Credentials:
        return self._credentials

    def __repr__(self) -> str:
        return f"StaticCredentialsProvider(access_key={self._credentials.access_key!r})"


class DefaultCredentialsProvider:
    """Delegates to the default credential chain of a boto3 session.

    The chain is evaluated on every call, so rotated credentials (instance
    profile refreshes, for example) are picked up.
    """

    def __init__(self, session: Optional[boto3.Session] = None):
        self._session = session

    def get_credentials(self) -> Optional[Credentials]:
        session = self._session if self._session is not None else boto3.Session()
        return session.get_credentials()

    def __repr__(self) -> str:
        return "DefaultCredentialsProvider()"


def build_credentials(
    settings: Settings,
    default_provider: Optional[CredentialsProvider] = None,
) -> CredentialsProvider:
    """Return the credentials provider for the given settings.

    Args:
        settings: The settings snapshot.
        default_provider: Provider used when no complete key/secret pair is
            configured. Defaults to a :class:`DefaultCredentialsProvider`.

    Returns:
        A :class:`StaticCredentialsProvider` when both ``access_key`` and
        ``secret_key`` resolve, otherwise ``default_provider``.
    """
    key = resolve_setting(settings, AWS.ACCESS_KEY, EC2.ACCESS_KEY)
    secret = resolve_setting(settings, AWS.SECRET_KEY, EC2.SECRET_KEY)

    if key is not None and secret is not None:
        _logger.debug("Using basic key/secret credentials")
        return StaticCredentialsProvider(key, secret)

    if key is not None or secret is not None:
        _logger.debug(
            "Only one of [access_key, secret_key] is set; ignoring it and using the default chain"
        )
    else:
        _logger.debug(
            "Using environment variables, shared config files or instance profile credentials"
        )

    if default_provider is None:
        default_provider = DefaultCredentialsProvider()
    return default_provider
