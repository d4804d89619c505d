"""Shared fixtures for discovery-ec2 tests."""

import pytest

from discovery_ec2.settings import Settings

_AWS_ENV_VARS = (
    "AWS_ACCESS_KEY_ID",
    "AWS_ACCESS_KEY",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_SECRET_KEY",
    "AWS_SESSION_TOKEN",
    "AWS_SECURITY_TOKEN",
    "AWS_PROFILE",
    "AWS_DEFAULT_PROFILE",
    "AWS_DEFAULT_REGION",
    "AWS_REGION",
    "AWS_ENDPOINT_URL",
    "AWS_ENDPOINT_URL_EC2",
    "AWS_CONTAINER_CREDENTIALS_RELATIVE_URI",
    "AWS_CONTAINER_CREDENTIALS_FULL_URI",
    "AWS_WEB_IDENTITY_TOKEN_FILE",
    "AWS_ROLE_ARN",
)


@pytest.fixture(autouse=True)
def isolated_aws_environment(monkeypatch, tmp_path):
    """Keep the default credential chain away from the real environment.

    No credentials from the host leak in, shared config files point at an
    empty directory and instance metadata lookups are disabled.
    """
    for name in _AWS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "aws-config"))
    monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "aws-credentials"))
    monkeypatch.setenv("AWS_EC2_METADATA_DISABLED", "true")


@pytest.fixture
def aws_settings():
    """Every option set in the generic tier only."""
    return Settings(
        {
            "cloud.aws.protocol": "http",
            "cloud.aws.proxy.host": "aws_proxy_host",
            "cloud.aws.proxy.port": 8080,
            "cloud.aws.proxy.username": "aws_proxy_username",
            "cloud.aws.proxy.password": "aws_proxy_password",
            "cloud.aws.signer": "AWS3SignerType",
        }
    )


@pytest.fixture
def aws_and_ec2_settings(aws_settings):
    """Every option set in both tiers with different values."""
    return Settings(
        {
            **aws_settings,
            "cloud.aws.ec2.protocol": "https",
            "cloud.aws.ec2.proxy.host": "ec2_proxy_host",
            "cloud.aws.ec2.proxy.port": 8081,
            "cloud.aws.ec2.proxy.username": "ec2_proxy_username",
            "cloud.aws.ec2.proxy.password": "ec2_proxy_password",
            "cloud.aws.ec2.signer": "NoOpSignerType",
        }
    )
