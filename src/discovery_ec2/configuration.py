"""HTTP client configuration for the EC2 client.

Each option is resolved on its own through :func:`resolve_setting`; there is
no validation across options, so a proxy username without a proxy host is
carried through unchanged.
"""

import enum
import logging
from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import quote

from botocore.config import Config

from discovery_ec2.errors import SettingsError
from discovery_ec2.settings import AWS, EC2, Settings, resolve_setting

_logger = logging.getLogger(__name__)

NO_PROXY_PORT = -1


class Protocol(enum.Enum):
    HTTP = "http"
    HTTPS = "https"

    @classmethod
    def parse(cls, value: str) -> "Protocol":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise SettingsError(
                f"Unsupported protocol [{value}], expected one of [http, https]",
                key="protocol",
            ) from None


@dataclass(frozen=True)
class ClientConfiguration:
    """Resolved client options.

    Attributes:
        protocol: Scheme used to reach the EC2 endpoint.
        proxy_host: Proxy host name, or None for no proxy.
        proxy_port: Proxy port, ``-1`` when unset.
        proxy_username: Proxy user name, or None.
        proxy_password: Proxy password, or None.
        signer_override: Signature version passed to botocore, or None.
        read_timeout: Socket read timeout in seconds, or None for the SDK default.
        response_metadata_cache_size: Always 0, response metadata is not kept.
    """

    protocol: Protocol = Protocol.HTTPS
    proxy_host: Optional[str] = None
    proxy_port: int = NO_PROXY_PORT
    proxy_username: Optional[str] = None
    proxy_password: Optional[str] = field(default=None, repr=False)
    signer_override: Optional[str] = None
    read_timeout: Optional[int] = None
    response_metadata_cache_size: int = 0

    def proxy_url(self) -> Optional[str]:
        """Return the proxy URL, or None when no proxy host is set."""
        if self.proxy_host is None:
            return None

        userinfo = ""
        if self.proxy_username is not None:
            userinfo = quote(self.proxy_username, safe="")
            if self.proxy_password is not None:
                userinfo += ":" + quote(self.proxy_password, safe="")
            userinfo += "@"

        port = f":{self.proxy_port}" if self.proxy_port != NO_PROXY_PORT else ""
        return f"http://{userinfo}{self.proxy_host}{port}"

    def to_botocore_config(self) -> Config:
        """Render these options as a botocore client ``Config``."""
        kwargs = {}
        proxy = self.proxy_url()
        if proxy is not None:
            kwargs["proxies"] = {self.protocol.value: proxy}
        if self.signer_override is not None:
            kwargs["signature_version"] = self.signer_override
        if self.read_timeout is not None:
            kwargs["read_timeout"] = self.read_timeout
        return Config(**kwargs)


def build_configuration(settings: Settings) -> ClientConfiguration:
    """Resolve every client option from the generic and EC2 tiers."""
    protocol = resolve_setting(settings, AWS.PROTOCOL, EC2.PROTOCOL)
    proxy_port = resolve_setting(settings, AWS.PROXY_PORT, EC2.PROXY_PORT)

    configuration = ClientConfiguration(
        protocol=Protocol.parse(protocol) if protocol is not None else Protocol.HTTPS,
        proxy_host=resolve_setting(settings, AWS.PROXY_HOST, EC2.PROXY_HOST),
        proxy_port=proxy_port if proxy_port is not None else NO_PROXY_PORT,
        proxy_username=resolve_setting(settings, AWS.PROXY_USERNAME, EC2.PROXY_USERNAME),
        proxy_password=resolve_setting(settings, AWS.PROXY_PASSWORD, EC2.PROXY_PASSWORD),
        signer_override=resolve_setting(settings, AWS.SIGNER, EC2.SIGNER),
        read_timeout=resolve_setting(settings, AWS.READ_TIMEOUT, EC2.READ_TIMEOUT),
    )
    _logger.debug(
        "Resolved client configuration: protocol=%s proxy_host=%s proxy_port=%s signer=%s",
        configuration.protocol.value,
        configuration.proxy_host,
        configuration.proxy_port,
        configuration.signer_override,
    )
    return configuration
