"""Tests for the in-memory project store (src/portfolio/repositories/project_store.py).

Tests cover:
- create: id assignment, timestamps, name uniqueness
- list: search, ordering, pagination
- update/delete/get_by_id: not-found handling and identity fields
- stats, seed, clear and count
"""

import threading

import pytest

from src.portfolio.models import compute_project_hash
from src.portfolio.repositories import SAMPLE_PROJECTS, DuplicateNameError, ProjectStore
from src.portfolio.schemas import ProjectCreate, ProjectUpdate
from tests.helpers import FakeClock, create_projects

pytestmark = pytest.mark.unit


class TestCreate:
    """Tests for ProjectStore.create."""

    def test_assigns_ids_and_timestamps(self, store: ProjectStore) -> None:
        project = store.create(
            ProjectCreate(name="Portfolio Site", description="Personal site", tags=["web"])
        )

        assert project.id == 1
        assert project.name == "Portfolio Site"
        assert project.description == "Personal site"
        assert project.tags == ("web",)
        assert project.status == "active"
        assert project.created_at == "2024-05-01T12:00:00.000Z"
        assert project.updated_at == project.created_at
        assert project.hash == compute_project_hash(
            "Portfolio Site", "Personal site", project.created_at
        )

    def test_duplicate_name_is_rejected_case_insensitively(self, store: ProjectStore) -> None:
        store.create(ProjectCreate(name="Alpha Tool"))

        with pytest.raises(DuplicateNameError) as exc_info:
            store.create(ProjectCreate(name="ALPHA tool"))

        assert exc_info.value.name == "ALPHA tool"
        assert "already exists" in str(exc_info.value)
        assert store.count() == 1

    def test_names_equal_only_after_case_folding_are_distinct(self, store: ProjectStore) -> None:
        store.create(ProjectCreate(name="Straße"))
        store.create(ProjectCreate(name="STRASSE"))

        assert store.count() == 2
        with pytest.raises(DuplicateNameError):
            store.create(ProjectCreate(name="STRAßE"))

    def test_duplicate_name_error_is_a_value_error(self, store: ProjectStore) -> None:
        store.create(ProjectCreate(name="Alpha"))

        with pytest.raises(ValueError):
            store.create(ProjectCreate(name="alpha"))

    def test_failed_create_does_not_consume_an_id(self, store: ProjectStore) -> None:
        store.create(ProjectCreate(name="Alpha"))
        with pytest.raises(DuplicateNameError):
            store.create(ProjectCreate(name="Alpha"))

        assert store.create(ProjectCreate(name="Beta")).id == 2

    def test_ids_are_never_reused_after_delete(self, store: ProjectStore) -> None:
        first = store.create(ProjectCreate(name="A"))
        assert store.delete(first.id)

        second = store.create(ProjectCreate(name="B"))

        assert first.id == 1
        assert second.id == 2

    def test_deleted_name_can_be_reused(self, store: ProjectStore) -> None:
        first = store.create(ProjectCreate(name="Reusable"))
        store.delete(first.id)

        again = store.create(ProjectCreate(name="Reusable"))

        assert again.id == 2

    def test_concurrent_creates_keep_names_unique(self) -> None:
        store = ProjectStore()
        errors: list[Exception] = []

        def worker() -> None:
            try:
                store.create(ProjectCreate(name="Contended"))
            except DuplicateNameError as e:
                errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert store.count() == 1
        assert len(errors) == 7


class TestList:
    """Tests for ProjectStore.list."""

    def test_newest_first(self, store: ProjectStore, clock: FakeClock) -> None:
        create_projects(store, clock, 3)

        result = store.list()

        assert [p.name for p in result.data] == ["Project 3", "Project 2", "Project 1"]
        assert result.total == 3

    def test_equal_timestamps_keep_insertion_order(self, store: ProjectStore) -> None:
        for name in ("First", "Second", "Third"):
            store.create(ProjectCreate(name=name))

        result = store.list()

        assert [p.name for p in result.data] == ["First", "Second", "Third"]

    def test_pagination_last_partial_page(self, store: ProjectStore, clock: FakeClock) -> None:
        create_projects(store, clock, 25)

        result = store.list(page=3, limit=10)

        # Newest first: positions 21-25 are the five oldest projects
        assert result.total == 25
        assert [p.name for p in result.data] == [f"Project {i}" for i in range(5, 0, -1)]

    def test_page_past_the_end_is_empty(self, store: ProjectStore, clock: FakeClock) -> None:
        create_projects(store, clock, 5)

        result = store.list(page=4, limit=2)

        assert result.data == []
        assert result.total == 5

    def test_search_matches_name_and_tags(self, store: ProjectStore) -> None:
        store.create(ProjectCreate(name="Alpha Tool"))
        store.create(ProjectCreate(name="Beta Gadget", tags=["alpha-tag"]))
        store.create(ProjectCreate(name="Gamma"))

        result = store.list(search="ALPHA")

        assert {p.name for p in result.data} == {"Alpha Tool", "Beta Gadget"}
        assert result.total == 2

    def test_search_matches_description(self, store: ProjectStore) -> None:
        store.create(ProjectCreate(name="Gamma", description="Uses a Rust backend"))
        store.create(ProjectCreate(name="Delta"))

        result = store.list(search="rust")

        assert [p.name for p in result.data] == ["Gamma"]

    def test_search_lowercases_without_folding(self, store: ProjectStore) -> None:
        store.create(ProjectCreate(name="Straße"))

        assert store.list(search="STRASSE").total == 0
        assert store.list(search="STRAßE").total == 1

    def test_total_counts_filtered_matches_before_paging(
        self, store: ProjectStore, clock: FakeClock
    ) -> None:
        create_projects(store, clock, 12, prefix="Widget")
        create_projects(store, clock, 3, prefix="Other")

        result = store.list(page=1, limit=5, search="widget")

        assert result.total == 12
        assert len(result.data) == 5

    def test_empty_search_returns_everything(self, store: ProjectStore, clock: FakeClock) -> None:
        create_projects(store, clock, 4)

        assert store.list(search="").total == 4
        assert store.list(search=None).total == 4


class TestGetById:
    def test_found(self, store: ProjectStore) -> None:
        created = store.create(ProjectCreate(name="Alpha"))

        assert store.get_by_id(created.id) == created

    def test_missing_returns_none(self, store: ProjectStore) -> None:
        assert store.get_by_id(42) is None


class TestUpdate:
    """Tests for ProjectStore.update."""

    def test_preserves_identity_fields(self, store: ProjectStore, clock: FakeClock) -> None:
        original = store.create(ProjectCreate(name="Alpha", description="first"))
        clock.advance(minutes=5)

        updated = store.update(original.id, ProjectUpdate(description="second"))

        assert updated is not None
        assert updated.id == original.id
        assert updated.created_at == original.created_at
        assert updated.updated_at == "2024-05-01T12:05:00.000Z"
        assert updated.updated_at > original.updated_at
        assert updated.description == "second"
        assert updated.name == "Alpha"

    def test_only_supplied_fields_change(self, store: ProjectStore) -> None:
        original = store.create(
            ProjectCreate(name="Alpha", description="desc", tags=["a", "b"], status="paused")
        )

        updated = store.update(original.id, ProjectUpdate(status="completed"))

        assert updated is not None
        assert updated.status == "completed"
        assert updated.tags == ("a", "b")
        assert updated.description == "desc"

    def test_full_replacement_resets_omitted_fields(self, store: ProjectStore) -> None:
        original = store.create(
            ProjectCreate(name="Alpha", description="desc", tags=["a"], status="paused")
        )

        updated = store.update(original.id, ProjectUpdate.replacing(ProjectCreate(name="Alpha 2")))

        assert updated is not None
        assert updated.name == "Alpha 2"
        assert updated.description is None
        assert updated.tags == ()
        assert updated.status == "active"

    def test_hash_is_recomputed(self, store: ProjectStore) -> None:
        original = store.create(ProjectCreate(name="Alpha"))

        renamed = store.update(original.id, ProjectUpdate(name="Omega"))

        assert renamed is not None
        assert renamed.hash != original.hash
        assert renamed.hash == compute_project_hash("Omega", None, original.created_at)

    def test_hash_unchanged_when_hashed_fields_unchanged(self, store: ProjectStore) -> None:
        original = store.create(ProjectCreate(name="Alpha", description="same"))

        updated = store.update(original.id, ProjectUpdate(tags=["new"]))

        assert updated is not None
        assert updated.hash == original.hash

    def test_missing_returns_none(self, store: ProjectStore) -> None:
        assert store.update(99, ProjectUpdate(name="Nope")) is None

    def test_rename_to_other_projects_name_is_rejected(self, store: ProjectStore) -> None:
        store.create(ProjectCreate(name="Alpha"))
        beta = store.create(ProjectCreate(name="Beta"))

        with pytest.raises(DuplicateNameError):
            store.update(beta.id, ProjectUpdate(name="alpha"))

        assert store.get_by_id(beta.id) == beta

    def test_keeping_own_name_with_different_case_is_allowed(self, store: ProjectStore) -> None:
        alpha = store.create(ProjectCreate(name="Alpha"))

        updated = store.update(alpha.id, ProjectUpdate(name="ALPHA"))

        assert updated is not None
        assert updated.name == "ALPHA"

    def test_missing_id_wins_over_duplicate_name(self, store: ProjectStore) -> None:
        store.create(ProjectCreate(name="Alpha"))

        assert store.update(99, ProjectUpdate(name="Alpha")) is None


class TestDelete:
    def test_delete_then_get(self, store: ProjectStore, clock: FakeClock) -> None:
        create_projects(store, clock, 3)

        assert store.delete(3) is True
        assert store.get_by_id(3) is None
        assert store.count() == 2

    def test_delete_missing(self, store: ProjectStore) -> None:
        assert store.delete(1) is False


class TestStats:
    def test_days_since_creation(self, store: ProjectStore, clock: FakeClock) -> None:
        project = store.create(ProjectCreate(name="Alpha", description="d", tags=["x", "y"]))
        clock.advance(days=2)

        stats = store.stats(project.id)

        assert stats is not None
        assert stats.days_since_creation == 2
        assert stats.tag_count == 2
        assert stats.has_description is True
        assert stats.status == "active"
        assert stats.last_updated == project.updated_at
        assert stats.hash == project.hash

    def test_partial_days_are_floored(self, store: ProjectStore, clock: FakeClock) -> None:
        project = store.create(ProjectCreate(name="Alpha"))
        clock.advance(days=1, hours=23, minutes=59)

        stats = store.stats(project.id)

        assert stats is not None
        assert stats.days_since_creation == 1
        assert stats.has_description is False

    def test_clock_behind_creation_reports_zero_days(
        self, store: ProjectStore, clock: FakeClock
    ) -> None:
        project = store.create(ProjectCreate(name="Alpha"))
        clock.advance(hours=-3)

        stats = store.stats(project.id)

        assert stats is not None
        assert stats.days_since_creation == 0

    def test_missing_returns_none(self, store: ProjectStore) -> None:
        assert store.stats(7) is None


class TestSeedAndClear:
    def test_seed_is_idempotent(self, store: ProjectStore) -> None:
        assert store.seed() is True
        assert store.count() == len(SAMPLE_PROJECTS) == 3

        assert store.seed() is False
        assert store.count() == 3

    def test_seed_skips_non_empty_store(self, store: ProjectStore) -> None:
        store.create(ProjectCreate(name="Existing"))

        assert store.seed() is False
        assert store.count() == 1

    def test_seeded_projects(self, store: ProjectStore) -> None:
        store.seed()

        names = {p.name for p in store.list(limit=10).data}
        completed = store.list(search="Data Analytics").data[0]

        assert names == {
            "E-commerce Platform",
            "Task Management API",
            "Data Analytics Dashboard",
        }
        assert completed.status == "completed"

    def test_clear_resets_ids(self, store: ProjectStore) -> None:
        store.seed()

        store.clear()

        assert store.count() == 0
        assert store.create(ProjectCreate(name="Fresh")).id == 1
