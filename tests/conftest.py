"""Pytest fixtures for permsvc tests."""

from __future__ import annotations

import copy
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from uuid import UUID, uuid4

import pytest

from permsvc.application.ports import GroupInfo
from permsvc.application.services import (
    PermissionLevelRegistry,
    PermissionMutationEngine,
    PermissionQueryEngine,
    SourceIdEnricher,
    SubjectIdentityResolver,
)
from permsvc.domain.entities import (
    Permission,
    PermissionCandidate,
    PermissionLevel,
    Resource,
    ResourceType,
    Subject,
)
from permsvc.domain.exceptions import DirectoryUnavailable
from permsvc.domain.value_objects import SubjectType, normalize_resource_type_name
from permsvc.infrastructure.directory import StaticGroupDirectory

SEED_LEVELS = [("own", 0), ("admin", 1), ("write", 2), ("read", 3)]


# --- Fake storage ---


class FakeDatabase:
    """In-memory tables shared by every unit of work of one test.

    Rows are stored as plain tuples; repositories build fresh entities on every
    read, so callers mutating results never touch stored state.
    """

    def __init__(self) -> None:
        self.levels: dict[UUID, PermissionLevel] = {}
        self.subjects: dict[UUID, tuple[str, SubjectType]] = {}
        self.resource_types: dict[UUID, tuple[str, str | None]] = {}
        self.resources: dict[UUID, tuple[str, UUID]] = {}
        self.permissions: dict[UUID, tuple[UUID, UUID, UUID]] = {}
        for name, precedence in SEED_LEVELS:
            level = PermissionLevel(id=uuid4(), name=name, precedence=precedence)
            self.levels[level.id] = level

    def snapshot(self) -> tuple:
        return copy.deepcopy(
            (self.subjects, self.resource_types, self.resources, self.permissions)
        )

    def restore(self, state: tuple) -> None:
        self.subjects, self.resource_types, self.resources, self.permissions = state

    def subject(self, id: UUID) -> Subject:
        subject_id, subject_type = self.subjects[id]
        return Subject(id=id, subject_id=subject_id, subject_type=subject_type)

    def resource(self, id: UUID) -> Resource:
        name, resource_type_id = self.resources[id]
        return Resource(id=id, name=name, resource_type=self.resource_types[resource_type_id][0])

    def permission(self, id: UUID) -> Permission:
        subject_id, resource_id, level_id = self.permissions[id]
        return Permission(
            id=id,
            subject=self.subject(subject_id),
            resource=self.resource(resource_id),
            permission_level=self.levels[level_id].name,
        )

    def level_by_name(self, name: str) -> PermissionLevel:
        return next(lv for lv in self.levels.values() if lv.name == name)


class FakePermissionLevelRepository:
    """In-memory permission level catalog."""

    def __init__(self, db: FakeDatabase) -> None:
        self._db = db

    async def get_by_name(self, name: str) -> PermissionLevel | None:
        for level in self._db.levels.values():
            if level.name == name:
                return level
        return None

    async def list_all(self) -> list[PermissionLevel]:
        return sorted(self._db.levels.values(), key=lambda lv: lv.precedence)


class FakeSubjectRepository:
    """In-memory subject repository. Deleting a subject cascades to its grants."""

    def __init__(self, db: FakeDatabase) -> None:
        self._db = db

    async def get_by_id(self, id: UUID) -> Subject | None:
        return self._db.subject(id) if id in self._db.subjects else None

    async def get(self, subject_id: str, subject_type: SubjectType) -> Subject | None:
        for id, row in self._db.subjects.items():
            if row == (subject_id, subject_type):
                return self._db.subject(id)
        return None

    async def get_by_external_id(self, subject_id: str) -> Subject | None:
        for id, row in self._db.subjects.items():
            if row[0] == subject_id:
                return self._db.subject(id)
        return None

    async def external_id_exists(self, subject_id: str, exclude_id: UUID | None = None) -> bool:
        return any(
            row[0] == subject_id and id != exclude_id
            for id, row in self._db.subjects.items()
        )

    async def add(self, subject_id: str, subject_type: SubjectType) -> Subject:
        id = uuid4()
        self._db.subjects[id] = (subject_id, subject_type)
        return self._db.subject(id)

    async def update(
        self, id: UUID, subject_id: str, subject_type: SubjectType
    ) -> Subject | None:
        if id not in self._db.subjects:
            return None
        self._db.subjects[id] = (subject_id, subject_type)
        return self._db.subject(id)

    async def delete(self, id: UUID) -> int:
        if self._db.subjects.pop(id, None) is None:
            return 0
        self._db.permissions = {
            pid: row for pid, row in self._db.permissions.items() if row[0] != id
        }
        return 1

    async def list(
        self,
        *,
        subject_type: SubjectType | None = None,
        subject_id: str | None = None,
    ) -> list[Subject]:
        items = [
            self._db.subject(id)
            for id, row in self._db.subjects.items()
            if (subject_type is None or row[1] == subject_type)
            and (subject_id is None or row[0] == subject_id)
        ]
        items.sort(key=lambda s: (str(s.subject_type), s.subject_id))
        return items


class FakeResourceTypeRepository:
    """In-memory resource type repository with normalized name matching."""

    def __init__(self, db: FakeDatabase) -> None:
        self._db = db

    def _to_entity(self, id: UUID) -> ResourceType:
        name, description = self._db.resource_types[id]
        return ResourceType(id=id, name=name, description=description)

    async def get_by_id(self, id: UUID) -> ResourceType | None:
        return self._to_entity(id) if id in self._db.resource_types else None

    async def get_by_name(self, name: str) -> ResourceType | None:
        wanted = normalize_resource_type_name(name)
        for id, row in self._db.resource_types.items():
            if normalize_resource_type_name(row[0]) == wanted:
                return self._to_entity(id)
        return None

    async def get_duplicate(self, id: UUID, name: str) -> ResourceType | None:
        existing = await self.get_by_name(name)
        return existing if existing is not None and existing.id != id else None

    async def add(self, name: str, description: str | None) -> ResourceType:
        id = uuid4()
        self._db.resource_types[id] = (name, description)
        return self._to_entity(id)

    async def update(
        self, id: UUID, name: str, description: str | None
    ) -> ResourceType | None:
        if id not in self._db.resource_types:
            return None
        self._db.resource_types[id] = (name, description)
        return self._to_entity(id)

    async def delete(self, id: UUID) -> int:
        return 1 if self._db.resource_types.pop(id, None) is not None else 0

    async def list(self, *, name: str | None = None) -> list[ResourceType]:
        items = [self._to_entity(id) for id in self._db.resource_types]
        if name is not None:
            wanted = normalize_resource_type_name(name)
            items = [rt for rt in items if normalize_resource_type_name(rt.name) == wanted]
        items.sort(key=lambda rt: rt.name)
        return items


class FakeResourceRepository:
    """In-memory resource repository. Deleting a resource cascades to its grants."""

    def __init__(self, db: FakeDatabase) -> None:
        self._db = db

    async def get_by_id(self, id: UUID) -> Resource | None:
        return self._db.resource(id) if id in self._db.resources else None

    async def get_by_name(self, name: str, resource_type_id: UUID) -> Resource | None:
        for id, row in self._db.resources.items():
            if row == (name, resource_type_id):
                return self._db.resource(id)
        return None

    async def get_duplicate(self, id: UUID, name: str) -> Resource | None:
        if id not in self._db.resources:
            return None
        resource_type_id = self._db.resources[id][1]
        existing = await self.get_by_name(name, resource_type_id)
        return existing if existing is not None and existing.id != id else None

    async def count_of_type(self, resource_type_id: UUID) -> int:
        return sum(1 for row in self._db.resources.values() if row[1] == resource_type_id)

    async def add(self, name: str, resource_type_id: UUID) -> Resource:
        id = uuid4()
        self._db.resources[id] = (name, resource_type_id)
        return self._db.resource(id)

    async def update(self, id: UUID, name: str) -> Resource | None:
        if id not in self._db.resources:
            return None
        self._db.resources[id] = (name, self._db.resources[id][1])
        return self._db.resource(id)

    async def delete(self, id: UUID) -> int:
        if self._db.resources.pop(id, None) is None:
            return 0
        self._db.permissions = {
            pid: row for pid, row in self._db.permissions.items() if row[1] != id
        }
        return 1

    async def list(
        self,
        *,
        resource_type_name: str | None = None,
        resource_name: str | None = None,
    ) -> list[Resource]:
        items = [self._db.resource(id) for id in self._db.resources]
        if resource_type_name is not None:
            wanted = normalize_resource_type_name(resource_type_name)
            items = [
                r for r in items if normalize_resource_type_name(r.resource_type) == wanted
            ]
        if resource_name is not None:
            items = [r for r in items if r.name == resource_name]
        items.sort(key=lambda r: (r.resource_type, r.name))
        return items


class FakePermissionRepository:
    """In-memory permission repository keeping one grant per (subject, resource)."""

    def __init__(self, db: FakeDatabase) -> None:
        self._db = db

    def _precedence(self, level_id: UUID) -> int:
        return self._db.levels[level_id].precedence

    def _find(self, subject_id: UUID, resource_id: UUID) -> UUID | None:
        for pid, row in self._db.permissions.items():
            if row[0] == subject_id and row[1] == resource_id:
                return pid
        return None

    async def candidates_for_subjects(
        self,
        subject_ids: Sequence[str],
        *,
        resource_type_id: UUID | None = None,
        resource_id: UUID | None = None,
    ) -> list[PermissionCandidate]:
        wanted = set(subject_ids)
        result = []
        for pid, (subject_uuid, resource_uuid, level_id) in self._db.permissions.items():
            if self._db.subjects[subject_uuid][0] not in wanted:
                continue
            if resource_id is not None and resource_uuid != resource_id:
                continue
            if (
                resource_type_id is not None
                and self._db.resources[resource_uuid][1] != resource_type_id
            ):
                continue
            result.append(
                PermissionCandidate(
                    permission=self._db.permission(pid),
                    precedence=self._precedence(level_id),
                )
            )
        return result

    async def list_all(self) -> list[Permission]:
        items = [
            (self._db.permission(pid), self._precedence(row[2]))
            for pid, row in self._db.permissions.items()
        ]
        items.sort(key=lambda x: (x[0].subject.subject_id, x[0].resource.name, x[1]))
        return [p for p, _ in items]

    async def list_for_resource(
        self, resource_type_name: str, resource_name: str
    ) -> list[Permission]:
        wanted = normalize_resource_type_name(resource_type_name)
        items = [
            p
            for p in (self._db.permission(pid) for pid in self._db.permissions)
            if normalize_resource_type_name(p.resource.resource_type) == wanted
            and p.resource.name == resource_name
        ]
        items.sort(key=lambda p: p.subject.subject_id)
        return items

    async def get_by_id(self, permission_id: UUID) -> Permission | None:
        if permission_id not in self._db.permissions:
            return None
        return self._db.permission(permission_id)

    async def get(self, subject_id: UUID, resource_id: UUID) -> Permission | None:
        pid = self._find(subject_id, resource_id)
        return self._db.permission(pid) if pid is not None else None

    async def upsert(
        self, subject_id: UUID, resource_id: UUID, permission_level_id: UUID
    ) -> Permission | None:
        pid = self._find(subject_id, resource_id) or uuid4()
        self._db.permissions[pid] = (subject_id, resource_id, permission_level_id)
        return self._db.permission(pid)

    async def copy(self, source_subject_id: UUID, dest_subject_id: UUID) -> None:
        source_rows = [
            row for row in self._db.permissions.values() if row[0] == source_subject_id
        ]
        for _, resource_id, level_id in source_rows:
            pid = self._find(dest_subject_id, resource_id)
            if pid is None:
                self._db.permissions[uuid4()] = (dest_subject_id, resource_id, level_id)
                continue
            existing_level = self._db.permissions[pid][2]
            if self._precedence(level_id) < self._precedence(existing_level):
                self._db.permissions[pid] = (dest_subject_id, resource_id, level_id)

    async def delete(self, permission_id: UUID) -> int:
        return 1 if self._db.permissions.pop(permission_id, None) is not None else 0


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work over a shared FakeDatabase."""

    def __init__(self, db: FakeDatabase | None = None) -> None:
        self.db = db or FakeDatabase()
        self.permission_levels = FakePermissionLevelRepository(self.db)
        self.subjects = FakeSubjectRepository(self.db)
        self.resource_types = FakeResourceTypeRepository(self.db)
        self.resources = FakeResourceRepository(self.db)
        self.permissions = FakePermissionRepository(self.db)
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True


def make_uow_factory(db: FakeDatabase):
    """Factory with the same commit/rollback contract as the Postgres one.

    Changes made inside a block that raises are undone.
    """

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        state = db.snapshot()
        uow = FakeUnitOfWork(db)
        try:
            yield uow
            await uow.commit()
        except BaseException:
            db.restore(state)
            await uow.rollback()
            raise

    return _factory


# --- Fake directory ---


class FailingGroupDirectory:
    """Group directory whose backend is always down."""

    async def groups_for_subject(self, subject_id: str) -> list[GroupInfo]:
        raise DirectoryUnavailable("group directory is down")

    async def add_source_ids(self, permissions: Sequence[Permission]) -> None:
        raise DirectoryUnavailable("group directory is down")


# Memberships used throughout: s1 is in g1, g2 and g3; s2 is only in g1.
# g1 is itself a member of g4, which must never leak into s1's identities.
MEMBERSHIPS = {
    "s1": [GroupInfo("g1id", "g1"), GroupInfo("g2id", "g2"), GroupInfo("g3id", "g3")],
    "s2": [GroupInfo("g1id", "g1")],
    "g1id": [GroupInfo("g4id", "g4")],
}
SOURCES = {"s1": "ldap", "s2": "ldap", "g1id": "g:gsa"}


# --- Fixtures ---


@pytest.fixture
def db() -> FakeDatabase:
    """Fresh in-memory tables with the seeded permission levels."""
    return FakeDatabase()


@pytest.fixture
def fake_uow(db: FakeDatabase) -> FakeUnitOfWork:
    return FakeUnitOfWork(db)


@pytest.fixture
def uow_factory(db: FakeDatabase):
    """Factory returning async context managers over the shared FakeDatabase."""
    return make_uow_factory(db)


@pytest.fixture
def group_directory() -> StaticGroupDirectory:
    return StaticGroupDirectory(MEMBERSHIPS, SOURCES)


@pytest.fixture
def level_registry() -> PermissionLevelRegistry:
    return PermissionLevelRegistry()


@pytest.fixture
def query_engine(level_registry: PermissionLevelRegistry) -> PermissionQueryEngine:
    return PermissionQueryEngine(level_registry)


@pytest.fixture
def mutation_engine(level_registry: PermissionLevelRegistry) -> PermissionMutationEngine:
    return PermissionMutationEngine(level_registry)


@pytest.fixture
def identity_resolver(group_directory: StaticGroupDirectory) -> SubjectIdentityResolver:
    return SubjectIdentityResolver(group_directory)


@pytest.fixture
def enricher(group_directory: StaticGroupDirectory) -> SourceIdEnricher:
    return SourceIdEnricher(group_directory)


@pytest.fixture
def add_resource_type(db: FakeDatabase):
    """Helper inserting a resource type directly into the fake tables."""

    def _add(name: str = "app", description: str | None = None) -> UUID:
        id = uuid4()
        db.resource_types[id] = (name, description)
        return id

    return _add
