"""Tests for the relationship type catalog service."""

import pytest

from app.errors import ConflictError, InvalidArgumentError, NotFoundError
from app.models import RelationshipCategory, RelationshipTypeUpdate


async def test_create_type_assigns_id_and_timestamps(type_service, type_payload):
    created = await type_service.create_type(type_payload(metadata={"icon": "handshake"}))

    assert created.id == 1
    assert created.name == "Friend"
    assert created.category == RelationshipCategory.SOCIAL
    assert created.bidirectional is True
    assert created.reverse_type_id is None
    assert created.metadata == {"icon": "handshake"}
    assert created.created_at == created.updated_at


async def test_create_type_accepts_lower_case_category(type_service, type_payload):
    created = await type_service.create_type(type_payload(name="Colleague", category="professional"))
    assert created.category == RelationshipCategory.PROFESSIONAL


async def test_create_type_rejects_unknown_category(type_service, type_payload):
    with pytest.raises(InvalidArgumentError):
        await type_service.create_type(type_payload(category="ENEMY"))


async def test_create_duplicate_name_conflicts(type_service, type_payload):
    await type_service.create_type(type_payload())
    with pytest.raises(ConflictError):
        await type_service.create_type(type_payload(category="CUSTOM"))


async def test_create_with_unknown_reverse_type_is_not_found(type_service, type_payload):
    with pytest.raises(NotFoundError):
        await type_service.create_type(
            type_payload(name="Father", category="FAMILY", bidirectional=False, reverse_type_id=99)
        )


async def test_reverse_type_link(type_service, type_payload):
    son = await type_service.create_type(type_payload(name="Son", category="FAMILY", bidirectional=False))
    father = await type_service.create_type(
        type_payload(name="Father", category="FAMILY", bidirectional=False, reverse_type_id=son.id)
    )

    assert father.reverse_type_id == son.id
    reverse_of_son = await type_service.list_reverse_types(son.id)
    assert [t.name for t in reverse_of_son] == ["Father"]


async def test_type_metadata_accepts_any_json_value(type_service, type_payload):
    created = await type_service.create_type(type_payload(metadata=["kin", "close"]))
    assert created.metadata == ["kin", "close"]

    updated = await type_service.update_type(created.id, RelationshipTypeUpdate(metadata=0))
    assert updated.metadata == 0
    assert (await type_service.get_type(created.id)).metadata == 0


async def test_get_by_id_and_name(type_service, type_payload):
    created = await type_service.create_type(type_payload())

    assert (await type_service.get_type(created.id)).name == "Friend"
    assert (await type_service.get_type_by_name("Friend")).id == created.id
    assert await type_service.exists_by_name("Friend")
    assert not await type_service.exists_by_name("friend")

    with pytest.raises(NotFoundError):
        await type_service.get_type(42)
    with pytest.raises(NotFoundError):
        await type_service.get_type_by_name("Stranger")


async def test_list_types_with_filters(type_service, type_payload):
    await type_service.create_type(type_payload(name="Friend"))
    await type_service.create_type(type_payload(name="Father", category="FAMILY", bidirectional=False))
    await type_service.create_type(type_payload(name="Sibling", category="FAMILY", bidirectional=True))

    assert [t.name for t in await type_service.list_types()] == ["Friend", "Father", "Sibling"]
    assert [t.name for t in await type_service.list_types(category="FAMILY")] == ["Father", "Sibling"]
    assert [t.name for t in await type_service.list_types(bidirectional=True)] == ["Friend", "Sibling"]
    assert [
        t.name for t in await type_service.list_types(category="family", bidirectional=False)
    ] == ["Father"]


async def test_search_is_case_insensitive_substring(type_service, type_payload):
    await type_service.create_type(type_payload(name="Grandfather", category="FAMILY", bidirectional=False))
    await type_service.create_type(type_payload(name="Father", category="FAMILY", bidirectional=False))
    await type_service.create_type(type_payload(name="Friend"))

    assert [t.name for t in await type_service.search_types("FATHER")] == ["Grandfather", "Father"]
    assert await type_service.search_types("%") == []


async def test_update_is_partial(type_service, type_payload):
    created = await type_service.create_type(type_payload(metadata={"a": 1}))

    updated = await type_service.update_type(created.id, RelationshipTypeUpdate(category="CUSTOM"))

    assert updated.category == RelationshipCategory.CUSTOM
    assert updated.name == created.name
    assert updated.bidirectional == created.bidirectional
    assert updated.metadata == {"a": 1}
    assert updated.updated_at >= created.updated_at


async def test_rename_to_own_name_does_not_conflict(type_service, type_payload):
    created = await type_service.create_type(type_payload())
    updated = await type_service.update_type(created.id, RelationshipTypeUpdate(name="Friend"))
    assert updated.name == "Friend"


async def test_rename_to_other_rows_name_conflicts(type_service, type_payload):
    await type_service.create_type(type_payload(name="Friend"))
    colleague = await type_service.create_type(type_payload(name="Colleague", category="PROFESSIONAL"))

    with pytest.raises(ConflictError):
        await type_service.update_type(colleague.id, RelationshipTypeUpdate(name="Friend"))


async def test_update_unknown_type_and_reverse(type_service, type_payload):
    with pytest.raises(NotFoundError):
        await type_service.update_type(7, RelationshipTypeUpdate(name="Nobody"))

    created = await type_service.create_type(type_payload())
    with pytest.raises(NotFoundError):
        await type_service.update_type(created.id, RelationshipTypeUpdate(reverse_type_id=99))


async def test_delete_type(type_service, type_payload):
    created = await type_service.create_type(type_payload())
    await type_service.delete_type(created.id)

    with pytest.raises(NotFoundError):
        await type_service.get_type(created.id)
    with pytest.raises(NotFoundError):
        await type_service.delete_type(created.id)


async def test_delete_clears_reverse_links(type_service, type_payload):
    son = await type_service.create_type(type_payload(name="Son", category="FAMILY", bidirectional=False))
    father = await type_service.create_type(
        type_payload(name="Father", category="FAMILY", bidirectional=False, reverse_type_id=son.id)
    )

    await type_service.delete_type(son.id)

    assert (await type_service.get_type(father.id)).reverse_type_id is None


async def test_delete_type_in_use_conflicts(type_service, relationship_service, type_payload, relationship_payload):
    friend = await type_service.create_type(type_payload())
    await relationship_service.create_relationship(relationship_payload(10, 20, friend.id))

    with pytest.raises(ConflictError):
        await type_service.delete_type(friend.id)
    assert (await type_service.get_type(friend.id)).name == "Friend"
