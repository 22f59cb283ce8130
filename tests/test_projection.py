from __future__ import annotations

import fakeredis

from pybluster._constants import DEFAULT_OBJECT_TYPES
from pybluster.ingestion.parser import parse_object_cache
from pybluster.ingestion.projection import project_objects, projected_keys, prune_orphans

CACHE = """\
define command {
\tcommand_name\tcheck_ping
\tcommand_line\t$USER1$/check_ping -H $HOSTADDRESS$
\t}
define contact {
\tcontact_name\tx
\ta\t1
\tb\ttwo words
\t}
define contact {
\temail\tnameless@example.com
\t}
define host {
\thost_name\tweb01
\taddress\t10.0.0.1
\t}
"""


def _snapshot(client: fakeredis.FakeRedis) -> dict[str, str]:
    return {key: client.get(key) for key in client.keys("*")}


def test_projection_writes_one_key_per_non_name_attribute(store, redis_client) -> None:
    written = project_objects(
        store,
        parse_object_cache(CACHE),
        namespace="bluster",
        object_types=DEFAULT_OBJECT_TYPES,
    )

    assert written == 3
    assert _snapshot(redis_client) == {
        "bluster:objects:contact:x:a": "1",
        "bluster:objects:contact:x:b": "two words",
        "bluster:objects:command:check_ping:command_line": "$USER1$/check_ping -H $HOSTADDRESS$",
    }


def test_projection_follows_configured_type_order(store) -> None:
    project_objects(
        store,
        parse_object_cache(CACHE),
        namespace="bluster",
        object_types={"contact": "contact_name", "command": "command_name"},
    )

    assert store.sets == [
        "bluster:objects:contact:x:a",
        "bluster:objects:contact:x:b",
        "bluster:objects:command:check_ping:command_line",
    ]


def test_name_attribute_is_never_stored(store, redis_client) -> None:
    project_objects(store, parse_object_cache(CACHE), namespace="bluster", object_types=DEFAULT_OBJECT_TYPES)

    assert not [key for key in redis_client.keys("*") if key.endswith(("contact_name", "command_name"))]


def test_additional_types_can_be_projected(store, redis_client) -> None:
    project_objects(
        store,
        parse_object_cache(CACHE),
        namespace="nagios",
        object_types={"host": "host_name"},
    )

    assert _snapshot(redis_client) == {"nagios:objects:host:web01:address": "10.0.0.1"}


def test_projection_is_idempotent(store, redis_client) -> None:
    objects = parse_object_cache(CACHE)

    project_objects(store, objects, namespace="bluster", object_types=DEFAULT_OBJECT_TYPES)
    once = _snapshot(redis_client)
    project_objects(store, objects, namespace="bluster", object_types=DEFAULT_OBJECT_TYPES)

    assert _snapshot(redis_client) == once


def test_projected_keys_skips_records_without_name() -> None:
    keys = projected_keys(parse_object_cache(CACHE), namespace="bluster", object_types={"contact": "contact_name"})

    assert [key.segments[3] for key in keys] == ["x", "x"]


def test_prune_orphans_removes_only_vanished_keys(store, redis_client) -> None:
    project_objects(store, parse_object_cache(CACHE), namespace="bluster", object_types=DEFAULT_OBJECT_TYPES)
    redis_client.set("bluster:objects:host:web01:address", "10.0.0.1")
    redis_client.set("bluster:last_update_timestamp", "1")

    smaller = parse_object_cache("define contact {\ncontact_name x\na 1\n}\n")
    deleted = prune_orphans(store, smaller, namespace="bluster", object_types=DEFAULT_OBJECT_TYPES)

    assert deleted == 2
    assert _snapshot(redis_client) == {
        "bluster:objects:contact:x:a": "1",
        "bluster:objects:host:web01:address": "10.0.0.1",
        "bluster:last_update_timestamp": "1",
    }


def test_prune_orphans_noop_when_nothing_vanished(store) -> None:
    objects = parse_object_cache(CACHE)
    project_objects(store, objects, namespace="bluster", object_types=DEFAULT_OBJECT_TYPES)

    assert prune_orphans(store, objects, namespace="bluster", object_types=DEFAULT_OBJECT_TYPES) == 0
