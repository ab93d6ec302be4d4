"""Tests for container resolution."""

import pytest

from pagecloner.exceptions import NotFoundError, ValidationError
from pagecloner.resolver import ContainerResolver


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_resolve_returns_container(fake_client):
    resolver = ContainerResolver(fake_client)
    container = resolver.resolve("ENG")
    assert (container.id, container.key, container.name) == ("2", "ENG", "Engineering")


def test_resolve_is_memoized(fake_client):
    resolver = ContainerResolver(fake_client)
    resolver.resolve("TEAM")
    resolver.resolve("TEAM")
    assert fake_client.count("find_container") == 1


def test_memo_entries_expire(fake_client):
    clock = FakeClock()
    resolver = ContainerResolver(fake_client, ttl=60, clock=clock)
    resolver.resolve("TEAM")
    clock.now = 61
    resolver.resolve("TEAM")
    assert fake_client.count("find_container") == 2


def test_zero_ttl_disables_memo(fake_client):
    resolver = ContainerResolver(fake_client, ttl=0)
    resolver.resolve("OPS")
    resolver.resolve("OPS")
    assert fake_client.count("find_container") == 2


def test_unknown_key_raises_not_found(fake_client):
    with pytest.raises(NotFoundError, match="NOPE"):
        ContainerResolver(fake_client).resolve("NOPE")


def test_lookup_is_exact_match(fake_client):
    with pytest.raises(NotFoundError):
        ContainerResolver(fake_client).resolve("team")


def test_blank_key_is_a_validation_error(fake_client):
    with pytest.raises(ValidationError):
        ContainerResolver(fake_client).resolve("  ")


def test_remember_seeds_the_memo(fake_client):
    resolver = ContainerResolver(fake_client)
    resolver.remember(fake_client.containers[1])
    assert resolver.resolve("ENG").id == "2"
    assert fake_client.count("find_container") == 0
