"""Client configuration for pybluster."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pybluster._constants import (
    DEFAULT_NAMESPACE,
    DEFAULT_OBJECT_TYPES,
    DEFAULT_PORT,
    DEFAULT_SERVER,
    KNOWN_NAME_ATTRIBUTES,
)
from pybluster.exceptions import BlusterConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def parse_server_address(server: str) -> tuple[str, int]:
    """Split a ``"host:port"`` address.

    The port defaults to 6379 when omitted.  Raises
    :class:`BlusterConfigError` for an empty host or a bad port.
    """
    host, sep, port_text = server.strip().rpartition(":")
    if not sep:
        host, port_text = port_text, ""
    if not host:
        raise BlusterConfigError(f"server address has no host: {server!r}")
    if not port_text:
        return host, DEFAULT_PORT
    try:
        port = int(port_text)
    except ValueError as exc:
        raise BlusterConfigError(f"server port is not an integer: {server!r}") from exc
    if not 0 < port < 65536:
        raise BlusterConfigError(f"server port out of range: {server!r}")
    return host, port


def parse_object_types(value: str) -> dict[str, str]:
    """Parse ``"contact=contact_name,host=host_name"`` into an ordered mapping.

    A bare type name (``"host"``) uses the standard Nagios name attribute
    for that type.
    """
    result: dict[str, str] = {}
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        object_type, sep, name_attribute = item.partition("=")
        object_type = object_type.strip()
        name_attribute = name_attribute.strip()
        if not sep:
            name_attribute = KNOWN_NAME_ATTRIBUTES.get(object_type, "")
        if not object_type or not name_attribute:
            raise BlusterConfigError(f"object type entry must look like 'type=name_attribute': {item!r}")
        result[object_type] = name_attribute
    if not result:
        raise BlusterConfigError("no object types configured")
    return result


@dataclasses.dataclass(frozen=True)
class BlusterConfig:
    """Client configuration.

    Parameters
    ----------
    objects_path : str
        Path to the Nagios ``objects.cache`` file.
    server : str
        Redis address as ``"host:port"``.
    namespace : str
        First segment of every store key.
    db : int
        Redis database index.
    password : str or None
        Redis password, if the server requires one.
    socket_timeout : float
        Seconds before a blocking Redis call gives up.
    object_types : dict[str, str]
        Object types written to the store, in order, mapped to the
        attribute that names a record of that type.
    prune_orphans : bool
        Delete stored objects and attributes that are no longer present
        in the object cache after each sync.  Off by default: removed
        objects otherwise stay in the store until deleted by hand.
    """

    objects_path: str
    server: str = DEFAULT_SERVER
    namespace: str = DEFAULT_NAMESPACE
    db: int = 0
    password: str | None = None
    socket_timeout: float = 5.0
    object_types: dict[str, str] = dataclasses.field(default_factory=lambda: dict(DEFAULT_OBJECT_TYPES))
    prune_orphans: bool = False

    def __post_init__(self) -> None:
        if not self.objects_path:
            raise BlusterConfigError("objects_path must be set")
        if not self.namespace:
            raise BlusterConfigError("namespace must be non-empty")
        if not self.object_types:
            raise BlusterConfigError("no object types configured")

    @property
    def host(self) -> str:
        return parse_server_address(self.server)[0]

    @property
    def port(self) -> int:
        return parse_server_address(self.server)[1]

    @classmethod
    def from_env(cls, **overrides: Any) -> BlusterConfig:
        """Create configuration from environment variables.

        Reads ``BLUSTER_OBJECTS_PATH`` and the optional ``BLUSTER_*``
        variables.  Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        BlusterConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "BLUSTER_OBJECTS_PATH": "objects_path",
            "BLUSTER_SERVER": "server",
            "BLUSTER_NAMESPACE": "namespace",
            "BLUSTER_PASSWORD": "password",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        db_env = env.get("BLUSTER_DB")
        if db_env is not None and "db" not in overrides:
            try:
                config_kwargs["db"] = int(db_env)
            except ValueError as exc:
                raise BlusterConfigError(f"BLUSTER_DB is not an integer: {db_env!r}") from exc

        timeout_env = env.get("BLUSTER_SOCKET_TIMEOUT")
        if timeout_env is not None and "socket_timeout" not in overrides:
            try:
                config_kwargs["socket_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise BlusterConfigError(f"BLUSTER_SOCKET_TIMEOUT is not a number: {timeout_env!r}") from exc

        types_env = env.get("BLUSTER_OBJECT_TYPES")
        if types_env is not None and "object_types" not in overrides:
            config_kwargs["object_types"] = parse_object_types(types_env)

        if "prune_orphans" not in overrides:
            config_kwargs["prune_orphans"] = _env_bool(env.get("BLUSTER_PRUNE_ORPHANS"), False)

        config_kwargs.update(overrides)

        if "objects_path" not in config_kwargs:
            raise BlusterConfigError("BLUSTER_OBJECTS_PATH is not set")

        return cls(**config_kwargs)
