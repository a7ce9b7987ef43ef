import uuid

from tests.conftest import API, auth


async def _playlist(client, user, name="Watch later"):
    resp = await client.post(f"{API}/playlists", json={"name": name, "description": "queue"}, headers=auth(user))
    assert resp.status_code == 201
    return resp.json()["data"]


async def test_create_playlist_requires_name(client, create_user):
    alice = await create_user("alice")
    resp = await client.post(f"{API}/playlists", json={"name": "  "}, headers=auth(alice))
    assert resp.status_code == 400


async def test_adding_same_video_twice_keeps_single_entry(client, create_user, publish_video):
    alice = await create_user("alice")
    video = await publish_video(alice)
    playlist = await _playlist(client, alice)

    first = await client.patch(f"{API}/playlists/add/{video['id']}/{playlist['id']}", headers=auth(alice))
    assert first.status_code == 200
    assert first.json()["message"] == "Video added to playlist successfully"

    second = await client.patch(f"{API}/playlists/add/{video['id']}/{playlist['id']}", headers=auth(alice))
    assert second.status_code == 200
    assert "already exists" in second.json()["message"]
    assert [v["id"] for v in second.json()["data"]["videos"]] == [video["id"]]
    assert second.json()["data"]["total_videos"] == 1


async def test_playlist_preserves_insertion_order_after_removal(client, create_user, publish_video):
    alice = await create_user("alice", avatar="http://img/a.png")
    videos = [await publish_video(alice, title=f"v{i}") for i in range(3)]
    playlist = await _playlist(client, alice)
    for v in videos:
        await client.patch(f"{API}/playlists/add/{v['id']}/{playlist['id']}", headers=auth(alice))

    removed = await client.patch(f"{API}/playlists/remove/{videos[1]['id']}/{playlist['id']}", headers=auth(alice))
    assert [v["title"] for v in removed.json()["data"]["videos"]] == ["v0", "v2"]

    fetched = await client.get(f"{API}/playlists/{playlist['id']}")
    data = fetched.json()["data"]
    assert [v["title"] for v in data["videos"]] == ["v0", "v2"]
    assert data["owner"] == {"id": alice["id"], "username": "alice", "avatar": "http://img/a.png"}


async def test_add_checks_existence_before_ownership(client, create_user, publish_video):
    alice = await create_user("alice")
    bob = await create_user("bob")
    video = await publish_video(alice)
    playlist = await _playlist(client, alice)

    missing_playlist = await client.patch(f"{API}/playlists/add/{video['id']}/{uuid.uuid4()}", headers=auth(bob))
    assert missing_playlist.status_code == 404
    missing_video = await client.patch(f"{API}/playlists/add/{uuid.uuid4()}/{playlist['id']}", headers=auth(bob))
    assert missing_video.status_code == 404
    forbidden = await client.patch(f"{API}/playlists/add/{video['id']}/{playlist['id']}", headers=auth(bob))
    assert forbidden.status_code == 403
    malformed = await client.patch(f"{API}/playlists/add/nope/{playlist['id']}", headers=auth(bob))
    assert malformed.status_code == 400


async def test_update_and_delete_playlist(client, create_user):
    alice = await create_user("alice")
    bob = await create_user("bob")
    playlist = await _playlist(client, alice)

    assert (await client.patch(f"{API}/playlists/{playlist['id']}", json={"name": "x"}, headers=auth(bob))).status_code == 403

    upd = await client.patch(f"{API}/playlists/{playlist['id']}", json={"name": "Renamed"}, headers=auth(alice))
    assert upd.json()["data"]["name"] == "Renamed"
    assert upd.json()["data"]["description"] == "queue"

    assert (await client.delete(f"{API}/playlists/{playlist['id']}", headers=auth(bob))).status_code == 403
    assert (await client.delete(f"{API}/playlists/{playlist['id']}", headers=auth(alice))).status_code == 200
    assert (await client.get(f"{API}/playlists/{playlist['id']}")).status_code == 404


async def test_user_playlists_listing(client, create_user):
    alice = await create_user("alice")
    await _playlist(client, alice, "b-list")
    await _playlist(client, alice, "a-list")

    resp = await client.get(f"{API}/playlists/user/{alice['id']}", params={"sort_by": "name", "sort_type": "asc"})
    data = resp.json()["data"]
    assert [p["name"] for p in data["docs"]] == ["a-list", "b-list"]
    assert data["docs"][0]["owner"]["username"] == "alice"


async def test_remove_video_checks_existence_then_ownership(client, create_user, publish_video):
    alice = await create_user("alice")
    bob = await create_user("bob")
    video = await publish_video(alice)
    playlist = await _playlist(client, alice)
    await client.patch(f"{API}/playlists/add/{video['id']}/{playlist['id']}", headers=auth(alice))

    missing = await client.patch(f"{API}/playlists/remove/{video['id']}/{uuid.uuid4()}", headers=auth(bob))
    assert missing.status_code == 404
    assert missing.json()["message"] == "Playlist not found"

    forbidden = await client.patch(f"{API}/playlists/remove/{video['id']}/{playlist['id']}", headers=auth(bob))
    assert forbidden.status_code == 403

    fetched = await client.get(f"{API}/playlists/{playlist['id']}")
    assert [v["id"] for v in fetched.json()["data"]["videos"]] == [video["id"]]
