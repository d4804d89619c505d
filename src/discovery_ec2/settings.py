"""Settings snapshot and the two-tier setting declarations.

A :class:`Settings` object is an immutable mapping from dotted keys to scalar
values. Nested documents are flattened on the way in, so

```yaml
cloud:
    aws:
        region: eu-west
        ec2:
            region: us-west
```

becomes ``{"cloud.aws.region": "eu-west", "cloud.aws.ec2.region": "us-west"}``.

Every option is declared twice: once in the generic ``AWS`` group, which
applies to all AWS services, and once in the specific ``EC2`` group, which
overrides it for EC2 discovery. :func:`resolve_setting` applies that
precedence for a single option.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Iterator, NamedTuple, Optional, Union

import yaml

from discovery_ec2.errors import SettingsError

_logger = logging.getLogger(__name__)


class Settings(Mapping):
    """Read-only snapshot of flattened settings.

    Keys whose value is ``None`` (an empty YAML entry, for instance) are
    dropped, so absence is always represented by a missing key.
    """

    EMPTY: "Settings"

    def __init__(self, values: Optional[Mapping] = None):
        self._values: dict[str, Any] = {}
        if values:
            _flatten(values, "", self._values)

    @classmethod
    def from_dict(cls, values: Mapping) -> "Settings":
        """Build a snapshot from a flat or nested mapping."""
        return cls(values)

    @classmethod
    def loads(cls, content: str) -> "Settings":
        """Parse a YAML (or JSON) document into a snapshot."""
        try:
            document = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise SettingsError(f"Failed to parse settings: {e}") from e

        if document is None:
            return cls()
        if not isinstance(document, Mapping):
            raise SettingsError(
                f"Settings document must be a mapping, got {type(document).__name__}"
            )
        return cls(document)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Settings":
        """Load a snapshot from a YAML or JSON file."""
        path = Path(path)
        _logger.debug("Loading settings from %s", path)
        try:
            content = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise SettingsError(f"Settings file {path} is not valid UTF-8: {e}") from e
        return cls.loads(content)

    @classmethod
    def load_merged(cls, paths: list[Union[str, Path]]) -> "Settings":
        """Load several files, later files overriding earlier ones key by key."""
        merged: dict[str, Any] = {}
        for path in paths:
            merged.update(cls.load(path))
        return cls.from_dict(merged)

    def get_str(self, key: str) -> Optional[str]:
        """Return the value for ``key`` as a string, or None if absent."""
        value = self._values.get(key)
        if value is None:
            return None
        if isinstance(value, (list, tuple)):
            raise SettingsError(f"Setting [{key}] must be a string, got a list", key=key)
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def get_int(self, key: str) -> Optional[int]:
        """Return the value for ``key`` as an integer, or None if absent."""
        value = self._values.get(key)
        if value is None:
            return None
        if isinstance(value, bool):
            raise SettingsError(f"Setting [{key}] must be an integer, got {value!r}", key=key)
        if isinstance(value, int):
            return value
        try:
            return int(str(value).strip())
        except ValueError:
            raise SettingsError(
                f"Setting [{key}] must be an integer, got {value!r}", key=key
            ) from None

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Settings({sorted(self._values)!r})"


Settings.EMPTY = Settings()


def _flatten(values: Mapping, prefix: str, out: dict) -> None:
    for key, value in values.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, Mapping):
            _flatten(value, f"{full_key}.", out)
        elif value is not None:
            out[full_key] = value


class Setting(NamedTuple):
    """A single typed option key."""

    key: str
    value_type: type = str

    def get(self, settings: Settings) -> Any:
        """Return the typed value of this option, or None if absent."""
        if self.value_type is int:
            return settings.get_int(self.key)
        return settings.get_str(self.key)


class SettingGroup:
    """The full option set under one key prefix.

    The generic and specific tiers are two instances of this class with
    parallel attribute names, so any option can be looked up in both.
    """

    def __init__(self, prefix: str):
        self.prefix = prefix
        self.ACCESS_KEY = Setting(f"{prefix}.access_key")
        self.SECRET_KEY = Setting(f"{prefix}.secret_key")
        self.PROTOCOL = Setting(f"{prefix}.protocol")
        self.PROXY_HOST = Setting(f"{prefix}.proxy.host")
        self.PROXY_PORT = Setting(f"{prefix}.proxy.port", int)
        self.PROXY_USERNAME = Setting(f"{prefix}.proxy.username")
        self.PROXY_PASSWORD = Setting(f"{prefix}.proxy.password")
        self.SIGNER = Setting(f"{prefix}.signer")
        self.REGION = Setting(f"{prefix}.region")
        self.READ_TIMEOUT = Setting(f"{prefix}.read_timeout", int)
        self.ENDPOINT = Setting(f"{prefix}.endpoint")

    def __repr__(self) -> str:
        return f"SettingGroup({self.prefix!r})"


# Generic tier: applies to every AWS service.
AWS = SettingGroup("cloud.aws")

# Specific tier: EC2 discovery only, overrides AWS.
EC2 = SettingGroup("cloud.aws.ec2")


def resolve_setting(settings: Settings, generic: Setting, specific: Setting) -> Any:
    """Return the specific value if set, else the generic value, else None.

    Example:
        >>> s = Settings({"cloud.aws.region": "eu-west", "cloud.aws.ec2.region": "us-west"})
        >>> resolve_setting(s, AWS.REGION, EC2.REGION)
        'us-west'
    """
    value = specific.get(settings)
    if value is not None:
        return value
    return generic.get(settings)
