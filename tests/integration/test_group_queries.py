"""Integration tests for group lookups and role-annotated group views."""

import pytest

from grouphub.domain.entities import GroupRole, MemberRole
from grouphub.infrastructure.persistence.repositories import (
    GroupMemberRepository,
    GroupRepository,
)


async def _add_member(session_factory, group_id, uid, role):
    async with session_factory() as session:
        async with session.begin():
            await GroupMemberRepository(session).add_one(group_id, uid, role)


@pytest.mark.asyncio
async def test_find_all_excludes_application_groups(group_service):
    """Test that a user's group list only holds user-created groups."""
    plain = await group_service.create("Plain", "user-1")
    await group_service.create("Integration", "user-1", appid="app-1")

    groups = await group_service.find_all("user-1")

    assert [g.id for g in groups] == [plain.id]
    assert groups[0].name == "Plain"
    assert groups[0].members == [MemberRole(uid="user-1", role=GroupRole.OWNER)]


@pytest.mark.asyncio
async def test_find_all_lists_every_member(group_service, session_factory):
    """Test that each listed group carries all members, not just the caller."""
    group = await group_service.create("Shared", "owner")
    await _add_member(session_factory, group.id, "dev-1", GroupRole.DEVELOPER)
    await _add_member(session_factory, group.id, "admin-1", GroupRole.ADMIN)
    await group_service.create("Someone else's", "stranger")

    groups = await group_service.find_all("dev-1")

    assert len(groups) == 1
    view = groups[0]
    assert view.id == group.id
    assert {(m.uid, m.role) for m in view.members} == {
        ("owner", GroupRole.OWNER),
        ("dev-1", GroupRole.DEVELOPER),
        ("admin-1", GroupRole.ADMIN),
    }
    assert view.role_of("admin-1") == GroupRole.ADMIN
    assert view.role_of("stranger") is None


@pytest.mark.asyncio
async def test_find_all_for_user_without_groups(group_service):
    """Test that a user with no memberships gets an empty list."""
    await group_service.create("Team", "user-1")

    assert await group_service.find_all("nobody") == []


@pytest.mark.asyncio
async def test_find_groups_by_appid_and_uid_returns_only_own_groups(group_service):
    """Test that each user only sees the application groups they belong to."""
    first = await group_service.create("First", "user-1", appid="app-1")
    second = await group_service.create("Second", "user-2", appid="app-1")
    await group_service.create("Other app", "user-1", appid="app-2")
    await group_service.create("Plain", "user-1")

    mine = await group_service.find_groups_by_appid_and_uid("app-1", "user-1")
    theirs = await group_service.find_groups_by_appid_and_uid("app-1", "user-2")

    assert [(g.id, g.role) for g in mine] == [(first.id, GroupRole.OWNER)]
    assert [(g.id, g.role) for g in theirs] == [(second.id, GroupRole.OWNER)]


@pytest.mark.asyncio
async def test_find_groups_by_appid_and_uid_reports_member_role(group_service, session_factory):
    """Test that the caller's own role is reported for each group."""
    first = await group_service.create("First", "user-1", appid="app-1")
    second = await group_service.create("Second", "user-2", appid="app-1")
    await _add_member(session_factory, first.id, "user-2", GroupRole.DEVELOPER)

    groups = await group_service.find_groups_by_appid_and_uid("app-1", "user-2")

    assert {(g.id, g.role) for g in groups} == {
        (first.id, GroupRole.DEVELOPER),
        (second.id, GroupRole.OWNER),
    }


@pytest.mark.asyncio
async def test_find_groups_by_appid_and_uid_for_non_member(group_service):
    """Test that a non-member sees no application groups."""
    await group_service.create("App group", "user-1", appid="app-1")

    assert await group_service.find_groups_by_appid_and_uid("app-1", "user-9") == []


@pytest.mark.asyncio
async def test_find_groups_by_appid_and_uid_never_lists_user_created_groups(group_service):
    """Test that a missing or blank appid does not match user-created groups."""
    await group_service.create("Plain", "user-1")
    app_group = await group_service.create("App", "user-1", appid="app-1")

    assert await group_service.find_groups_by_appid_and_uid(None, "user-1") == []
    assert await group_service.find_groups_by_appid_and_uid("", "user-1") == []
    groups = await group_service.find_groups_by_appid_and_uid(" app-1 ", "user-1")
    assert [g.id for g in groups] == [app_group.id]


@pytest.mark.asyncio
async def test_find_one_with_role(group_service, session_factory):
    """Test that the single-group view carries the caller's role."""
    group = await group_service.create("Team", "owner")
    await _add_member(session_factory, group.id, "dev-1", GroupRole.DEVELOPER)

    owner_view = await group_service.find_one_with_role(group.id, "owner")
    dev_view = await group_service.find_one_with_role(group.id, "dev-1")

    assert owner_view.id == group.id
    assert owner_view.name == "Team"
    assert owner_view.role == GroupRole.OWNER
    assert owner_view.created_at == group.created_at
    assert dev_view.role == GroupRole.DEVELOPER
    assert await group_service.find_one_with_role(group.id, "stranger") is None


@pytest.mark.asyncio
async def test_dangling_membership_is_not_visible(group_service, session_factory):
    """Test that a membership left behind by a missing group yields no views."""
    group = await group_service.create("Gone", "user-1", appid="app-1")
    plain = await group_service.create("Gone too", "user-1")

    async with session_factory() as session:
        async with session.begin():
            repo = GroupRepository(session)
            await repo.delete_by_id(group.id)
            await repo.delete_by_id(plain.id)

    assert await group_service.find_one_with_role(group.id, "user-1") is None
    assert await group_service.find_one_with_role(plain.id, "user-1") is None
    assert await group_service.find_groups_by_appid_and_uid("app-1", "user-1") == []
    assert await group_service.find_all("user-1") == []


@pytest.mark.asyncio
async def test_count_groups_excludes_application_groups(group_service):
    """Test that only user-created groups count towards a user's total."""
    await group_service.create("One", "user-1")
    await group_service.create("Two", "user-1")
    await group_service.create("App", "user-1", appid="app-1")
    await group_service.create("Not mine", "user-2")

    assert await group_service.count_groups("user-1") == 2
    assert await group_service.count_groups("user-3") == 0


@pytest.mark.asyncio
async def test_find_group_by_appid(group_service):
    """Test exact-match lookup by appid."""
    group = await group_service.create("App", "user-1", appid="app-1")

    assert await group_service.find_group_by_appid("app-1") == group
    assert await group_service.find_group_by_appid("app-unknown") is None


@pytest.mark.asyncio
async def test_find_group_by_appid_normalizes_lookup(group_service):
    """Test that lookups strip the appid and never match user-created groups."""
    await group_service.create("Plain", "user-1")
    group = await group_service.create("App", "user-1", appid=" app-1 ")

    assert await group_service.find_group_by_appid(" app-1 ") == group
    assert await group_service.find_group_by_appid(None) is None
    assert await group_service.find_group_by_appid("  ") is None


@pytest.mark.asyncio
async def test_find_one(group_service):
    """Test point lookup of a group."""
    group = await group_service.create("Team", "user-1")

    assert await group_service.find_one(group.id) == group
    assert await group_service.find_one("missing") is None


@pytest.mark.asyncio
async def test_update_merges_fields_and_refreshes_timestamp(group_service):
    """Test that update sets only the supplied fields."""
    group = await group_service.create("Old name", "user-1", appid="app-1")

    updated = await group_service.update(group.id, {"name": "New name"})

    assert updated.name == "New name"
    assert updated.appid == "app-1"
    assert updated.created_by == "user-1"
    assert updated.created_at == group.created_at
    assert updated.updated_at >= group.updated_at
    assert await group_service.find_one(group.id) == updated


@pytest.mark.asyncio
async def test_update_clearing_appid_makes_group_user_created(group_service):
    """Test that setting a blank appid turns the group into a plain group."""
    group = await group_service.create("App", "user-1", appid="app-1")

    updated = await group_service.update(group.id, {"appid": ""})

    assert updated.appid is None
    assert await group_service.count_groups("user-1") == 1
    assert [g.id for g in await group_service.find_all("user-1")] == [group.id]


@pytest.mark.asyncio
async def test_update_missing_group_returns_none(group_service):
    """Test that updating a missing group returns None."""
    assert await group_service.update("missing", {"name": "Anything"}) is None


@pytest.mark.asyncio
async def test_update_rejects_unknown_fields(group_service):
    """Test that identity and timestamp fields cannot be updated."""
    group = await group_service.create("Team", "user-1")

    with pytest.raises(ValueError, match="id"):
        await group_service.update(group.id, {"id": "other"})
    with pytest.raises(ValueError, match="created_at"):
        await group_service.update(group.id, {"created_at": None})
