from __future__ import annotations

from dataclasses import replace

import pytest
from sqlalchemy.engine import Engine

from beagle.db.engine import build_engine
from beagle.domain.models import Endpoint
from beagle.exceptions import (
    ConstraintViolationError,
    InvalidArgumentError,
    NotFoundError,
    TransportError,
)
from beagle.repositories.endpoint_repository import EndpointRepository
from beagle.repositories.interfaces import EndpointStore

pytestmark = pytest.mark.unit


class UnreachableEngine:
    """Engine double failing the test if the repository touches the store."""

    def __init__(self) -> None:
        self.connect_calls = 0

    def connect(self):
        self.connect_calls += 1
        raise AssertionError("store must not be touched")


def make_endpoint(name: str = "kitchen-light", **overrides: object) -> Endpoint:
    values: dict[str, object] = {
        "name": name,
        "url": f"http://hooks.local/{name}",
        "method": "POST",
        "headers": {"Content-Type": "application/json"},
    }
    values.update(overrides)
    return Endpoint(**values)  # type: ignore[arg-type]


@pytest.mark.parametrize("operation", ["get", "delete"])
def test_zero_identifier_is_rejected_before_store_access(operation: str) -> None:
    engine = UnreachableEngine()
    repo = EndpointRepository(engine)  # type: ignore[arg-type]

    with pytest.raises(InvalidArgumentError):
        getattr(repo, operation)(0)

    assert engine.connect_calls == 0


def test_invalid_mutations_do_not_open_transactions() -> None:
    engine = UnreachableEngine()
    repo = EndpointRepository(engine)  # type: ignore[arg-type]

    with pytest.raises(InvalidArgumentError):
        repo.create(None)  # type: ignore[arg-type]
    with pytest.raises(InvalidArgumentError, match="already created"):
        repo.create(make_endpoint(id=7))
    with pytest.raises(InvalidArgumentError):
        repo.update(None)  # type: ignore[arg-type]
    with pytest.raises(InvalidArgumentError, match="not created yet"):
        repo.update(make_endpoint())
    with pytest.raises(InvalidArgumentError):
        repo.update(make_endpoint(id=-3))
    with pytest.raises(InvalidArgumentError):
        repo.delete(-1)
    with pytest.raises(InvalidArgumentError):
        repo.delete_many([])
    with pytest.raises(InvalidArgumentError):
        repo.delete_many([4, 0])
    with pytest.raises(InvalidArgumentError):
        repo.create(make_endpoint(headers={"X-Retry": object()}))

    assert engine.connect_calls == 0


@pytest.mark.parametrize("name", ["", "   ", None])
def test_blank_names_are_rejected_before_store_access(name: object) -> None:
    engine = UnreachableEngine()
    repo = EndpointRepository(engine)  # type: ignore[arg-type]

    with pytest.raises(InvalidArgumentError, match="name"):
        repo.create(make_endpoint(name, url="http://hooks.local/blank"))  # type: ignore[arg-type]
    with pytest.raises(InvalidArgumentError, match="name"):
        repo.update(make_endpoint(name, id=5, url="http://hooks.local/blank"))  # type: ignore[arg-type]

    assert engine.connect_calls == 0


def test_create_then_get_returns_equal_entity(repository: EndpointRepository) -> None:
    endpoint = make_endpoint(headers={"Authorization": "Bearer abc", "X-Trace": "1"})

    endpoint_id = repository.create(endpoint)

    assert endpoint_id > 0
    assert endpoint.id == 0
    assert repository.get(endpoint_id) == replace(endpoint, id=endpoint_id)


def test_create_assigns_increasing_identifiers(repository: EndpointRepository) -> None:
    first = repository.create(make_endpoint("a"))
    second = repository.create(make_endpoint("b"))

    assert second > first


def test_get_missing_identifier_raises_not_found(repository: EndpointRepository) -> None:
    with pytest.raises(NotFoundError):
        repository.get(42)


def test_update_overwrites_stored_fields(repository: EndpointRepository) -> None:
    endpoint_id = repository.create(make_endpoint("porch"))
    changed = make_endpoint(
        "porch-renamed",
        id=endpoint_id,
        url="https://hooks.local/v2/porch",
        method="PUT",
        headers={},
    )

    repository.update(changed)

    assert repository.get(endpoint_id) == changed


def test_update_of_unknown_identifier_is_a_no_op(repository: EndpointRepository) -> None:
    endpoint_id = repository.create(make_endpoint("garage"))
    before = repository.find()

    repository.update(make_endpoint("ghost", id=endpoint_id + 100))

    assert repository.find() == before
    assert repository.count() == 1


def test_delete_removes_single_row(repository: EndpointRepository) -> None:
    keep = repository.create(make_endpoint("keep"))
    drop = repository.create(make_endpoint("drop"))

    repository.delete(drop)

    assert [endpoint.id for endpoint in repository.find()] == [keep]
    with pytest.raises(NotFoundError):
        repository.get(drop)


def test_delete_many_removes_exactly_the_given_rows(repository: EndpointRepository) -> None:
    ids = [repository.create(make_endpoint(f"ep-{index}")) for index in range(5)]

    repository.delete_many([ids[1], ids[3]])

    assert [endpoint.id for endpoint in repository.find()] == [ids[0], ids[2], ids[4]]


def test_delete_many_uses_one_statement(engine: Engine) -> None:
    statements: list[str] = []

    class RecordingObserver:
        def on_query(self, operation: str, statement: object) -> None:
            statements.append(operation)

    repo = EndpointRepository(engine, observer=RecordingObserver())
    ids = [repo.create(make_endpoint(f"ep-{index}")) for index in range(3)]
    statements.clear()

    repo.delete_many(iter(ids))

    assert statements == ["delete_many"]
    assert repo.count() == 0


def test_count_tracks_inserts_and_deletes(repository: EndpointRepository) -> None:
    assert repository.count() == 0
    ids = [repository.create(make_endpoint(f"ep-{index}")) for index in range(6)]

    repository.delete(ids[0])
    repository.delete_many(ids[2:4])

    assert repository.count() == 3


def test_store_rejection_is_classified_and_rolled_back(
    engine: Engine, repository: EndpointRepository
) -> None:
    with pytest.raises(ConstraintViolationError):
        repository.create(make_endpoint(url=None))

    assert repository.count() == 0
    assert engine.pool.checkedout() == 0


def test_missing_table_surfaces_transport_error(database_url: str) -> None:
    engine = build_engine(database_url)
    repo = EndpointRepository(engine)
    try:
        with pytest.raises(TransportError):
            repo.count()
        with pytest.raises(TransportError):
            repo.create(make_endpoint())
        assert engine.pool.checkedout() == 0
    finally:
        engine.dispose()


def test_owned_connections_are_returned_to_pool(
    engine: Engine, repository: EndpointRepository
) -> None:
    endpoint_id = repository.create(make_endpoint())
    repository.update(make_endpoint("renamed", id=endpoint_id))
    repository.get(endpoint_id)
    repository.delete(endpoint_id)

    assert engine.pool.checkedout() == 0


def test_repository_satisfies_store_protocol(repository: EndpointRepository) -> None:
    assert isinstance(repository, EndpointStore)
