"""Tests for DefinitionStore."""

import pytest

from slashdeck.core.definition import Definition, Kind
from slashdeck.core.exceptions import DefNotFoundError, DuplicateIdentifierError
from slashdeck.core.store import DefinitionStore


def make_def(identifier: str, kind: Kind = Kind.COMMAND, category: str | None = None):
    return Definition(
        identifier=identifier,
        kind=kind,
        description=f"{identifier} description",
        body=f"{identifier} body",
        category=category,
    )


class TestDefinitionStore:
    def test_put_and_get(self):
        store = DefinitionStore()
        lint = make_def("lint")
        store.put(lint)

        assert store.get(Kind.COMMAND, "lint") is lint
        assert (Kind.COMMAND, "lint") in store
        assert len(store) == 1

    def test_duplicate_within_kind_rejected(self):
        store = DefinitionStore()
        store.put(make_def("lint"))

        with pytest.raises(DuplicateIdentifierError) as exc:
            store.put(make_def("lint"))

        assert exc.value.kind == "command"
        assert exc.value.def_id == "lint"

    def test_same_identifier_across_kinds_allowed(self):
        store = DefinitionStore()
        store.put(make_def("reviewer", Kind.COMMAND))
        store.put(make_def("reviewer", Kind.AGENT))

        assert store.get(Kind.COMMAND, "reviewer").kind is Kind.COMMAND
        assert store.get(Kind.AGENT, "reviewer").kind is Kind.AGENT

    def test_get_missing_raises_not_found(self):
        store = DefinitionStore()
        store.put(make_def("lint"))

        with pytest.raises(DefNotFoundError) as exc:
            store.get(Kind.AGENT, "lint")

        assert exc.value.def_id == "lint"
        assert exc.value.kind == "agent"

    def test_list_sorted_and_restartable(self):
        store = DefinitionStore()
        for identifier in ["zeta", "alpha", "mid-1", "mid"]:
            store.put(make_def(identifier))
        store.put(make_def("agent-only", Kind.AGENT))

        listing = store.list(Kind.COMMAND)

        first = [d.identifier for d in listing]
        second = [d.identifier for d in listing]
        assert first == ["alpha", "mid", "mid-1", "zeta"]
        assert second == first
        assert len(listing) == 4

    def test_list_empty_kind(self):
        listing = DefinitionStore().list(Kind.AGENT)

        assert list(listing) == []
        assert not listing

    def test_categories(self):
        store = DefinitionStore()
        store.put(make_def("api-new", category="api"))
        store.put(make_def("button", category="ui"))
        store.put(make_def("api-test", category="api"))
        store.put(make_def("lint"))

        assert store.categories(Kind.COMMAND) == ["api", "ui"]


class TestFreeze:
    def test_put_after_freeze_raises(self):
        store = DefinitionStore()
        store.put(make_def("lint"))
        store.freeze()

        assert store.frozen
        with pytest.raises(RuntimeError):
            store.put(make_def("format"))

    def test_reads_after_freeze(self):
        store = DefinitionStore()
        store.put(make_def("lint"))
        store.freeze()
        store.freeze()

        assert store.get(Kind.COMMAND, "lint").identifier == "lint"
        assert [d.identifier for d in store.list(Kind.COMMAND)] == ["lint"]
