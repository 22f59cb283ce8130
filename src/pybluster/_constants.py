"""Internal constants shared across the library."""

DEFAULT_NAMESPACE = "bluster"
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 6379
DEFAULT_SERVER = f"{DEFAULT_HOST}:{DEFAULT_PORT}"

KEY_SEPARATOR = ":"
OBJECTS_SEGMENT = "objects"
SYNC_MARKER_SEGMENT = "last_update_timestamp"

# Object types written to the store, in projection order, mapped to the
# attribute that names a record within its type.
DEFAULT_OBJECT_TYPES: dict[str, str] = {
    "contact": "contact_name",
    "command": "command_name",
}

# Name attributes for the other object types found in a Nagios objects.cache.
KNOWN_NAME_ATTRIBUTES: dict[str, str] = {
    **DEFAULT_OBJECT_TYPES,
    "host": "host_name",
    "hostgroup": "hostgroup_name",
    "contactgroup": "contactgroup_name",
    "servicegroup": "servicegroup_name",
    "timeperiod": "timeperiod_name",
}
