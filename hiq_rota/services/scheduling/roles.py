"""
Job role resolution.
Staff profiles carry free-text job titles; shift rules reference job role ids.
"""

from typing import Optional

from .types import JobRole, RoleMapping, StaffMember


def _normalise(title: Optional[str]) -> str:
    return (title or "").strip().lower()


def resolve_job_role_id(
    job_title: Optional[str],
    job_roles: list[JobRole],
    mappings: list[RoleMapping],
    target_role_id: Optional[int] = None,
) -> Optional[int]:
    """
    Find the job role a job title corresponds to.

    Order of preference:
    1. a job role whose title matches exactly (case-insensitive)
    2. a mapping from this title to target_role_id
    3. the best-priority mapping for this title (lowest priority value)

    Returns None when the title cannot be resolved.
    """
    title = _normalise(job_title)
    if not title:
        return None

    for role in job_roles:
        if _normalise(role.title) == title:
            return role.id

    title_mappings = [m for m in mappings if _normalise(m.job_title) == title]
    if not title_mappings:
        return None

    if target_role_id is not None:
        for mapping in title_mappings:
            if mapping.job_role_id == target_role_id:
                return mapping.job_role_id

    best = min(title_mappings, key=lambda m: (m.priority, m.job_role_id))
    return best.job_role_id


def resolve_staff_roles(
    staff: StaffMember,
    job_roles: list[JobRole],
    mappings: list[RoleMapping],
) -> list[int]:
    """Role ids a staff member can work, primary title first."""
    role_ids: list[int] = list(staff.job_role_ids)

    titles = [staff.job_title] + list(staff.secondary_job_roles or [])
    for title in titles:
        role_id = resolve_job_role_id(title, job_roles, mappings)
        if role_id is not None and role_id not in role_ids:
            role_ids.append(role_id)

    return role_ids


def is_secondary_role(staff: StaffMember, job_role_id: int) -> bool:
    """True unless the role is the staff member's primary (first resolved) role."""
    return not staff.job_role_ids or staff.job_role_ids[0] != job_role_id


def find_role_by_keyword(
    job_roles: list[JobRole],
    keyword: str,
    is_kitchen: bool,
) -> Optional[JobRole]:
    """First role (by id) of the given kitchen/front-of-house side whose title contains keyword."""
    for role in sorted(job_roles, key=lambda r: r.id):
        if role.is_kitchen == is_kitchen and keyword in _normalise(role.title):
            return role
    return None
