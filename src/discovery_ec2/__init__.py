"""Resolve EC2 connection parameters from layered settings.

This package turns a settings snapshot into the three things needed to talk
to the EC2 API: credentials, an HTTP client configuration and an endpoint.

## Settings tiers

Every option can be set at two levels:

```yaml
cloud:
    aws:                    # generic tier, applies to all AWS services
        region: eu-west
        access_key: AKIA...
        secret_key: ...
        protocol: http
        proxy:
            host: proxy.internal
            port: 8080
        ec2:                # EC2 tier, overrides the generic tier
            region: us-west
            endpoint: ec2.custom.example
```

Configuration precedence (highest to lowest):
1. EC2-specific settings (`cloud.aws.ec2.*`)
2. Generic AWS settings (`cloud.aws.*`)
3. AWS SDK defaults (environment variables, credentials file, instance metadata)

## Usage

```python
from discovery_ec2 import Settings, build_credentials, build_configuration, find_endpoint

settings = Settings.load("settings.yaml")

provider = build_credentials(settings)
configuration = build_configuration(settings)
endpoint = find_endpoint(settings)  # None lets the SDK choose
```

Or get a ready boto3 client:

```python
from discovery_ec2 import create_client

ec2 = create_client(settings)
```
"""

__version__ = "0.1.0"

from discovery_ec2.client import create_client
from discovery_ec2.configuration import ClientConfiguration, Protocol, build_configuration
from discovery_ec2.credentials import (
    CredentialsProvider,
    DefaultCredentialsProvider,
    StaticCredentialsProvider,
    build_credentials,
)
from discovery_ec2.endpoint import REGIONS, endpoint_for_region, find_endpoint, find_region
from discovery_ec2.errors import DiscoveryEc2Error, InvalidRegionError, SettingsError
from discovery_ec2.settings import AWS, EC2, Setting, Settings, resolve_setting

__all__ = [
    "AWS",
    "ClientConfiguration",
    "CredentialsProvider",
    "DefaultCredentialsProvider",
    "DiscoveryEc2Error",
    "EC2",
    "InvalidRegionError",
    "Protocol",
    "REGIONS",
    "Setting",
    "Settings",
    "SettingsError",
    "StaticCredentialsProvider",
    "__version__",
    "build_configuration",
    "build_credentials",
    "create_client",
    "endpoint_for_region",
    "find_endpoint",
    "find_region",
    "resolve_setting",
]
