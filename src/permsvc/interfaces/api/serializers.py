"""JSON representations of domain objects."""

from permsvc.domain.entities import (
    AbbreviatedPermission,
    Permission,
    Resource,
    ResourceType,
    Subject,
)


def subject_to_dict(s: Subject) -> dict:
    return {
        "id": str(s.id),
        "subject_id": s.subject_id,
        "subject_type": str(s.subject_type),
        "subject_source_id": s.source_id,
    }


def resource_to_dict(r: Resource) -> dict:
    return {
        "id": str(r.id),
        "name": r.name,
        "resource_type": r.resource_type,
    }


def resource_type_to_dict(rt: ResourceType) -> dict:
    return {
        "id": str(rt.id),
        "name": rt.name,
        "description": rt.description,
    }


def permission_to_dict(p: Permission) -> dict:
    return {
        "id": str(p.id),
        "permission_level": p.permission_level,
        "resource": resource_to_dict(p.resource),
        "subject": subject_to_dict(p.subject),
    }


def abbreviated_permission_to_dict(p: AbbreviatedPermission) -> dict:
    return {
        "id": str(p.id),
        "resource_name": p.resource_name,
        "resource_type": p.resource_type,
        "permission_level": p.permission_level,
    }
