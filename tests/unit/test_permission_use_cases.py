"""Unit tests for permission use cases."""

from contextlib import asynccontextmanager

import pytest

from permsvc.application.ports import GroupInfo
from permsvc.application.services import SourceIdEnricher, SubjectIdentityResolver
from permsvc.application.use_cases.permission.copy_permissions import CopyPermissionsUseCase
from permsvc.application.use_cases.permission.grant_permission import GrantPermissionUseCase
from permsvc.application.use_cases.permission.list_permissions import (
    ListPermissionsUseCase,
    ListResourcePermissionsUseCase,
)
from permsvc.application.use_cases.permission.lookup_permissions import (
    AbbreviatedLookupUseCase,
    LookupBySubjectAndResourceTypeUseCase,
    LookupBySubjectAndResourceUseCase,
    LookupBySubjectUseCase,
)
from permsvc.application.use_cases.permission.revoke_permission import RevokePermissionUseCase
from permsvc.domain.exceptions import ClientError, DirectoryUnavailable, NotFound
from permsvc.domain.value_objects import ResourceRef, SubjectRef, SubjectType
from permsvc.infrastructure.directory import StaticGroupDirectory

from tests.conftest import MEMBERSHIPS, FailingGroupDirectory

S1 = SubjectRef("s1", SubjectType.USER)
G1 = SubjectRef("g1id", SubjectType.GROUP)
R1 = ResourceRef("r1", "app")


@pytest.fixture(autouse=True)
def _app_type(add_resource_type):
    add_resource_type("app")


@pytest.fixture
def grant(uow_factory, mutation_engine, enricher) -> GrantPermissionUseCase:
    return GrantPermissionUseCase(
        unit_of_work_factory=uow_factory,
        mutation_engine=mutation_engine,
        enricher=enricher,
    )


def _lookup(cls, uow_factory, resolver, query_engine, enricher):
    return cls(
        unit_of_work_factory=uow_factory,
        identity_resolver=resolver,
        query_engine=query_engine,
        enricher=enricher,
    )


# --- grant ---


@pytest.mark.asyncio
async def test_grant_enriches_subject_source(grant: GrantPermissionUseCase) -> None:
    result = await grant.execute(S1, R1, "write")
    assert result.enriched
    assert result.permission.subject.source_id == "ldap"


@pytest.mark.asyncio
async def test_grant_survives_directory_outage(uow_factory, mutation_engine, db) -> None:
    """The grant commits; only the enrichment is reported as failed."""
    use_case = GrantPermissionUseCase(
        unit_of_work_factory=uow_factory,
        mutation_engine=mutation_engine,
        enricher=SourceIdEnricher(FailingGroupDirectory()),
    )
    result = await use_case.execute(S1, R1, "write")
    assert not result.enriched
    assert result.permission.subject.source_id is None
    assert len(db.permissions) == 1


@pytest.mark.asyncio
async def test_failed_grant_rolls_back_created_rows(grant, db) -> None:
    """Subject and resource created before the level check are undone."""
    with pytest.raises(ClientError):
        await grant.execute(S1, R1, "superuser")
    assert db.subjects == {}
    assert db.resources == {}
    assert db.permissions == {}


# --- revoke ---


@pytest.mark.asyncio
async def test_revoke(grant, uow_factory, mutation_engine, db) -> None:
    await grant.execute(S1, R1, "read")
    revoke = RevokePermissionUseCase(uow_factory, mutation_engine)
    await revoke.execute(S1, R1)
    assert db.permissions == {}
    with pytest.raises(NotFound):
        await revoke.execute(S1, R1)


# --- copy ---


@pytest.mark.asyncio
async def test_copy_is_atomic(grant, uow_factory, mutation_engine, db) -> None:
    """A bad destination aborts the whole copy, including earlier destinations."""
    await grant.execute(S1, R1, "read")
    await grant.execute(SubjectRef("s3", SubjectType.USER), ResourceRef("r2", "app"), "read")
    copy = CopyPermissionsUseCase(uow_factory, mutation_engine)

    with pytest.raises(ClientError):
        await copy.execute(
            S1,
            [SubjectRef("s2", SubjectType.USER), SubjectRef("s3", SubjectType.GROUP)],
        )
    assert len(db.permissions) == 2
    assert all(row[0] != "s2" for row in db.subjects.values())


# --- lookups ---


@pytest.mark.asyncio
async def test_lookup_by_subject_with_groups(
    grant, uow_factory, identity_resolver, query_engine, enricher
) -> None:
    await grant.execute(S1, R1, "read")
    await grant.execute(G1, R1, "own")
    use_case = _lookup(
        LookupBySubjectUseCase, uow_factory, identity_resolver, query_engine, enricher
    )

    result = await use_case.execute(SubjectType.USER, "s1", lookup=True)
    assert [(p.permission_level, p.subject.subject_id) for p in result] == [("own", "g1id")]
    assert result[0].subject.source_id == "g:gsa"

    result = await use_case.execute(SubjectType.USER, "s1")
    assert [p.permission_level for p in result] == ["read"]


@pytest.mark.asyncio
async def test_lookup_rejects_wrong_subject_type(
    grant, uow_factory, identity_resolver, query_engine, enricher
) -> None:
    await grant.execute(S1, R1, "read")
    use_case = _lookup(
        LookupBySubjectUseCase, uow_factory, identity_resolver, query_engine, enricher
    )
    with pytest.raises(ClientError, match="incorrect type for subject"):
        await use_case.execute(SubjectType.GROUP, "s1")


@pytest.mark.asyncio
async def test_lookup_unknown_subject_is_empty(
    uow_factory, identity_resolver, query_engine, enricher
) -> None:
    use_case = _lookup(
        LookupBySubjectUseCase, uow_factory, identity_resolver, query_engine, enricher
    )
    assert await use_case.execute(SubjectType.USER, "ghost", lookup=True) == []


@pytest.mark.asyncio
async def test_lookup_directory_down_is_server_fault(
    grant, uow_factory, query_engine, enricher
) -> None:
    await grant.execute(S1, R1, "read")
    use_case = _lookup(
        LookupBySubjectUseCase,
        uow_factory,
        SubjectIdentityResolver(FailingGroupDirectory()),
        query_engine,
        enricher,
    )
    with pytest.raises(DirectoryUnavailable):
        await use_case.execute(SubjectType.USER, "s1", lookup=True)


@pytest.mark.asyncio
async def test_lookup_consults_directory_without_open_transaction(
    grant, uow_factory, query_engine, enricher
) -> None:
    await grant.execute(S1, R1, "read")
    await grant.execute(G1, R1, "own")
    open_transactions = 0

    @asynccontextmanager
    async def tracking_factory():
        nonlocal open_transactions
        open_transactions += 1
        try:
            async with uow_factory() as uow:
                yield uow
        finally:
            open_transactions -= 1

    class TrackingDirectory(StaticGroupDirectory):
        async def groups_for_subject(self, subject_id: str) -> list[GroupInfo]:
            assert open_transactions == 0
            return await super().groups_for_subject(subject_id)

    use_case = _lookup(
        LookupBySubjectUseCase,
        tracking_factory,
        SubjectIdentityResolver(TrackingDirectory(groups=MEMBERSHIPS)),
        query_engine,
        enricher,
    )
    result = await use_case.execute(SubjectType.USER, "s1", lookup=True)
    assert [p.permission_level for p in result] == ["own"]


@pytest.mark.asyncio
async def test_lookup_enrichment_failure_still_returns(
    grant, uow_factory, identity_resolver, query_engine
) -> None:
    await grant.execute(S1, R1, "read")
    use_case = _lookup(
        LookupBySubjectUseCase,
        uow_factory,
        identity_resolver,
        query_engine,
        SourceIdEnricher(FailingGroupDirectory()),
    )
    result = await use_case.execute(SubjectType.USER, "s1")
    assert [p.permission_level for p in result] == ["read"]
    assert result[0].subject.source_id is None


@pytest.mark.asyncio
async def test_lookup_scoped_shapes(
    grant, uow_factory, identity_resolver, query_engine, enricher
) -> None:
    await grant.execute(S1, R1, "read")
    await grant.execute(S1, ResourceRef("r2", "app"), "own")
    by_type = _lookup(
        LookupBySubjectAndResourceTypeUseCase,
        uow_factory,
        identity_resolver,
        query_engine,
        enricher,
    )
    by_resource = _lookup(
        LookupBySubjectAndResourceUseCase,
        uow_factory,
        identity_resolver,
        query_engine,
        enricher,
    )
    abbreviated = _lookup(
        AbbreviatedLookupUseCase, uow_factory, identity_resolver, query_engine, enricher
    )

    typed = await by_type.execute(SubjectType.USER, "s1", "app", min_level="own")
    assert [p.resource.name for p in typed] == ["r2"]

    single = await by_resource.execute(SubjectType.USER, "s1", "app", "r1")
    assert [p.permission_level for p in single] == ["read"]

    brief = await abbreviated.execute(SubjectType.USER, "s1", "app")
    assert [(p.resource_name, p.permission_level) for p in brief] == [
        ("r1", "read"),
        ("r2", "own"),
    ]


# --- listings ---


@pytest.mark.asyncio
async def test_list_permissions_is_not_collapsed(grant, uow_factory, enricher) -> None:
    await grant.execute(S1, R1, "read")
    await grant.execute(G1, R1, "own")
    result = await ListPermissionsUseCase(uow_factory, enricher).execute()
    assert [(p.subject.subject_id, p.permission_level) for p in result] == [
        ("g1id", "own"),
        ("s1", "read"),
    ]
    assert [p.subject.source_id for p in result] == ["g:gsa", "ldap"]


@pytest.mark.asyncio
async def test_list_resource_permissions(grant, uow_factory, enricher) -> None:
    await grant.execute(S1, R1, "read")
    await grant.execute(G1, ResourceRef("r2", "app"), "own")
    use_case = ListResourcePermissionsUseCase(uow_factory, enricher)
    result = await use_case.execute("App", "r1")
    assert [p.subject.subject_id for p in result] == ["s1"]
    assert await use_case.execute("app", "missing") == []
