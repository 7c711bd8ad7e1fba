"""Membership HTTP routes — join, leave, ranked listing, organizer flag edits."""

from uuid import uuid4

import pytest


@pytest.fixture
async def queue_id(client, auth_headers, alice) -> str:
    res = await client.post(
        "/api/v1/queues", json={"name": "Lab slots"}, headers=auth_headers(alice),
    )
    return res.json()["id"]


async def _members(client, headers, queue_id) -> list[dict]:
    res = await client.get(f"/api/v1/queues/{queue_id}/members", headers=headers)
    assert res.status_code == 200, res.text
    return res.json()


async def test_join_then_list(client, auth_headers, queue_id, alice, bob):
    res = await client.post(
        f"/api/v1/queues/{queue_id}/members", headers=auth_headers(bob),
    )
    assert res.status_code == 204

    members = await _members(client, auth_headers(bob), queue_id)

    assert [(m["user_id"], m["order"]) for m in members] == [
        (str(alice), 1), (str(bob), 2),
    ]
    assert set(members[0]) == {
        "user_id", "order", "has_priority", "is_held", "joined_at",
    }


async def test_join_twice_is_409(client, auth_headers, queue_id, bob):
    url = f"/api/v1/queues/{queue_id}/members"
    await client.post(url, headers=auth_headers(bob))

    res = await client.post(url, headers=auth_headers(bob))

    assert res.status_code == 409
    assert res.json()["error"]["code"] == "ALREADY_MEMBER"
    assert len(await _members(client, auth_headers(bob), queue_id)) == 2


async def test_join_unknown_queue_is_404(client, auth_headers, bob):
    res = await client.post(
        f"/api/v1/queues/{uuid4()}/members", headers=auth_headers(bob),
    )
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "QUEUE_NOT_FOUND"


async def test_leave(client, auth_headers, queue_id, alice, bob):
    await client.post(f"/api/v1/queues/{queue_id}/members", headers=auth_headers(bob))

    res = await client.delete(
        f"/api/v1/queues/{queue_id}/members/me", headers=auth_headers(bob),
    )

    assert res.status_code == 204
    members = await _members(client, auth_headers(alice), queue_id)
    assert [m["user_id"] for m in members] == [str(alice)]


async def test_leave_when_not_member_is_404(client, auth_headers, queue_id, bob):
    res = await client.delete(
        f"/api/v1/queues/{queue_id}/members/me", headers=auth_headers(bob),
    )
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "NOT_MEMBER"


async def test_get_single_member(client, auth_headers, queue_id, bob):
    await client.post(f"/api/v1/queues/{queue_id}/members", headers=auth_headers(bob))

    res = await client.get(
        f"/api/v1/queues/{queue_id}/members/{bob}", headers=auth_headers(bob),
    )

    assert res.status_code == 200
    assert res.json()["order"] == 2


async def test_get_single_non_member_is_404(client, auth_headers, queue_id, bob):
    res = await client.get(
        f"/api/v1/queues/{queue_id}/members/{bob}", headers=auth_headers(bob),
    )
    assert res.status_code == 404


async def test_organizer_sets_priority(client, auth_headers, queue_id, alice, bob, carol):
    for user in (bob, carol):
        await client.post(
            f"/api/v1/queues/{queue_id}/members", headers=auth_headers(user),
        )

    res = await client.patch(
        f"/api/v1/queues/{queue_id}/members/{carol}",
        json={"has_priority": True},
        headers=auth_headers(alice),
    )

    assert res.status_code == 200
    assert res.json()["order"] == 1
    members = await _members(client, auth_headers(alice), queue_id)
    assert [m["user_id"] for m in members] == [str(carol), str(alice), str(bob)]


async def test_non_organizer_cannot_set_flags(client, auth_headers, queue_id, bob):
    await client.post(f"/api/v1/queues/{queue_id}/members", headers=auth_headers(bob))

    res = await client.patch(
        f"/api/v1/queues/{queue_id}/members/{bob}",
        json={"has_priority": True},
        headers=auth_headers(bob),
    )

    assert res.status_code == 403


async def test_flag_update_requires_a_flag(client, auth_headers, queue_id, alice):
    res = await client.patch(
        f"/api/v1/queues/{queue_id}/members/{alice}",
        json={},
        headers=auth_headers(alice),
    )
    assert res.status_code == 400


async def test_organizer_flow_over_http(client, auth_headers, alice, bob, carol):
    res = await client.post(
        "/api/v1/queues", json={"name": "Q", "add_organizer": True},
        headers=auth_headers(alice),
    )
    queue_id = res.json()["id"]
    members_url = f"/api/v1/queues/{queue_id}/members"

    await client.post(members_url, headers=auth_headers(bob))
    await client.post(members_url, headers=auth_headers(carol))
    await client.patch(
        f"{members_url}/{carol}", json={"has_priority": True},
        headers=auth_headers(alice),
    )
    members = await _members(client, auth_headers(alice), queue_id)
    assert [(m["user_id"], m["order"]) for m in members] == [
        (str(carol), 1), (str(alice), 2), (str(bob), 3),
    ]

    await client.delete(f"{members_url}/me", headers=auth_headers(bob))
    members = await _members(client, auth_headers(alice), queue_id)
    assert [(m["user_id"], m["order"]) for m in members] == [
        (str(carol), 1), (str(alice), 2),
    ]

    res = await client.delete(f"/api/v1/queues/{queue_id}", headers=auth_headers(bob))
    assert res.status_code == 403

    res = await client.delete(f"/api/v1/queues/{queue_id}", headers=auth_headers(alice))
    assert res.status_code == 204

    res = await client.get(members_url, headers=auth_headers(alice))
    assert res.status_code == 404
