import uuid

import pytest

from tests.conftest import API, auth


async def test_video_like_toggle_alternates(client, create_user, publish_video):
    alice = await create_user("alice")
    bob = await create_user("bob")
    video = await publish_video(alice)

    first = await client.post(f"{API}/likes/toggle/v/{video['id']}", headers=auth(bob))
    assert first.status_code == 201
    assert first.json()["data"] == {"is_liked": True}
    assert first.json()["message"] == "Like added successfully"

    second = await client.post(f"{API}/likes/toggle/v/{video['id']}", headers=auth(bob))
    assert second.status_code == 200
    assert second.json()["data"] == {"is_liked": False}

    third = await client.post(f"{API}/likes/toggle/v/{video['id']}", headers=auth(bob))
    assert third.json()["data"] == {"is_liked": True}


async def test_likes_are_per_user(client, create_user, publish_video):
    alice = await create_user("alice")
    bob = await create_user("bob")
    video = await publish_video(alice)

    await client.post(f"{API}/likes/toggle/v/{video['id']}", headers=auth(alice))
    resp = await client.post(f"{API}/likes/toggle/v/{video['id']}", headers=auth(bob))
    assert resp.json()["data"] == {"is_liked": True}

    stats = await client.get(f"{API}/dashboard/stats", headers=auth(alice))
    assert stats.json()["data"]["total_likes"] == 2


async def test_comment_and_tweet_likes(client, create_user, publish_video):
    alice = await create_user("alice")
    video = await publish_video(alice)
    comment = (await client.post(f"{API}/comments/{video['id']}", json={"content": "c"}, headers=auth(alice))).json()["data"]
    tweet = (await client.post(f"{API}/tweets", json={"content": "t"}, headers=auth(alice))).json()["data"]

    c = await client.post(f"{API}/likes/toggle/c/{comment['id']}", headers=auth(alice))
    t = await client.post(f"{API}/likes/toggle/t/{tweet['id']}", headers=auth(alice))
    assert c.json()["data"] == {"is_liked": True}
    assert t.json()["data"] == {"is_liked": True}

    # Comment/tweet likes are not video likes.
    stats = await client.get(f"{API}/dashboard/stats", headers=auth(alice))
    assert stats.json()["data"]["total_likes"] == 0


@pytest.mark.parametrize("kind", ["v", "c", "t"])
async def test_like_missing_target(client, create_user, kind):
    alice = await create_user("alice")
    resp = await client.post(f"{API}/likes/toggle/{kind}/{uuid.uuid4()}", headers=auth(alice))
    assert resp.status_code == 404


@pytest.mark.parametrize("kind", ["v", "c", "t"])
async def test_like_malformed_target(client, create_user, kind):
    alice = await create_user("alice")
    resp = await client.post(f"{API}/likes/toggle/{kind}/12345", headers=auth(alice))
    assert resp.status_code == 400


async def test_like_requires_identity(client, create_user, publish_video):
    alice = await create_user("alice")
    video = await publish_video(alice)
    assert (await client.post(f"{API}/likes/toggle/v/{video['id']}")).status_code == 401
    bogus = {"X-User-Id": str(uuid.uuid4())}
    assert (await client.post(f"{API}/likes/toggle/v/{video['id']}", headers=bogus)).status_code == 401


async def test_liked_videos_listing(client, create_user, publish_video):
    alice = await create_user("alice", avatar="http://img/a.png")
    bob = await create_user("bob")
    liked = await publish_video(alice, title="liked")
    await publish_video(alice, title="ignored")

    empty = await client.get(f"{API}/likes/videos", headers=auth(bob))
    assert empty.json()["message"] == "User has no liked videos"
    assert empty.json()["data"]["docs"] == []

    await client.post(f"{API}/likes/toggle/v/{liked['id']}", headers=auth(bob))
    resp = await client.get(f"{API}/likes/videos", headers=auth(bob))
    docs = resp.json()["data"]["docs"]
    assert [d["title"] for d in docs] == ["liked"]
    assert docs[0]["owner"]["avatar"] == "http://img/a.png"
