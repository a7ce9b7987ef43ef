import pytest

from tests.conftest import API, auth


@pytest.fixture
def unpublish(client):
    async def _unpublish(user, video):
        resp = await client.patch(f"{API}/videos/toggle/publish/{video['id']}", headers=auth(user))
        assert resp.json()["data"] == {"is_published": False}
    return _unpublish


async def test_draft_disappears_from_existing_playlists(client, create_user, publish_video, unpublish):
    alice = await create_user("alice")
    bob = await create_user("bob")
    video = await publish_video(alice, title="secret draft")
    playlist = (await client.post(f"{API}/playlists", json={"name": "later"}, headers=auth(bob))).json()["data"]
    await client.patch(f"{API}/playlists/add/{video['id']}/{playlist['id']}", headers=auth(bob))

    await unpublish(alice, video)

    fetched = await client.get(f"{API}/playlists/{playlist['id']}", headers=auth(bob))
    assert fetched.json()["data"]["videos"] == []
    assert fetched.json()["data"]["total_videos"] == 0

    anonymous = await client.get(f"{API}/playlists/{playlist['id']}")
    assert anonymous.json()["data"]["videos"] == []

    listed = await client.get(f"{API}/playlists/user/{bob['id']}")
    assert listed.json()["data"]["docs"][0]["videos"] == []


async def test_owner_still_sees_own_draft_in_playlist(client, create_user, publish_video):
    alice = await create_user("alice")
    bob = await create_user("bob")
    draft = await publish_video(alice, title="wip", publish=False)
    playlist = (await client.post(f"{API}/playlists", json={"name": "mine"}, headers=auth(alice))).json()["data"]

    added = await client.patch(f"{API}/playlists/add/{draft['id']}/{playlist['id']}", headers=auth(alice))
    assert added.status_code == 200
    assert [v["title"] for v in added.json()["data"]["videos"]] == ["wip"]

    as_owner = await client.get(f"{API}/playlists/{playlist['id']}", headers=auth(alice))
    assert [v["title"] for v in as_owner.json()["data"]["videos"]] == ["wip"]

    as_bob = await client.get(f"{API}/playlists/{playlist['id']}", headers=auth(bob))
    assert as_bob.json()["data"]["videos"] == []


async def test_others_cannot_add_draft_to_playlist(client, create_user, publish_video):
    alice = await create_user("alice")
    bob = await create_user("bob")
    draft = await publish_video(alice, publish=False)
    playlist = (await client.post(f"{API}/playlists", json={"name": "later"}, headers=auth(bob))).json()["data"]

    resp = await client.patch(f"{API}/playlists/add/{draft['id']}/{playlist['id']}", headers=auth(bob))
    assert resp.status_code == 404
    assert resp.json()["message"] == "Video not found"


async def test_draft_comments_hidden_from_others(client, create_user, publish_video, unpublish):
    alice = await create_user("alice")
    bob = await create_user("bob")
    video = await publish_video(alice)
    await client.post(f"{API}/comments/{video['id']}", json={"content": "nice"}, headers=auth(bob))

    await unpublish(alice, video)

    assert (await client.get(f"{API}/comments/{video['id']}")).status_code == 404
    assert (await client.get(f"{API}/comments/{video['id']}", headers=auth(bob))).status_code == 404
    added = await client.post(f"{API}/comments/{video['id']}", json={"content": "again"}, headers=auth(bob))
    assert added.status_code == 404

    as_owner = await client.get(f"{API}/comments/{video['id']}", headers=auth(alice))
    assert as_owner.status_code == 200
    assert as_owner.json()["data"]["total_docs"] == 1


async def test_draft_cannot_be_liked_by_others(client, create_user, publish_video):
    alice = await create_user("alice")
    bob = await create_user("bob")
    draft = await publish_video(alice, publish=False)

    resp = await client.post(f"{API}/likes/toggle/v/{draft['id']}", headers=auth(bob))
    assert resp.status_code == 404

    own = await client.post(f"{API}/likes/toggle/v/{draft['id']}", headers=auth(alice))
    assert own.status_code == 201
