"""
Finalize and cleanup with a remote video host and caption overlay.
"""

import pytest
from fastapi.testclient import TestClient

from docintro.app import create_app

from conftest import FakeCaptionRenderer, FakeHostingService, create_doctor, upload_chunk


@pytest.fixture
def hosting():
    return FakeHostingService()


@pytest.fixture
def renderer():
    return FakeCaptionRenderer()


@pytest.fixture
def remote_client(services, hosting, renderer):
    services.hosting_service = hosting
    services.caption_renderer = renderer
    with TestClient(create_app(services=services)) as test_client:
        yield test_client


def test_finalize_uploads_captioned_video(remote_client, hosting, renderer, video_root, doctor_repo):
    doctor = create_doctor(remote_client, name="Dr. Alice")
    video_id = doctor["video_id"]
    upload_chunk(remote_client, video_id, b"AA")
    upload_chunk(remote_client, video_id, b"BB")

    response = remote_client.post(f"/finishUpload/{video_id}")

    assert response.status_code == 200
    body = response.json()
    assert body["video_url"] == f"{FakeHostingService.base_url}/{video_id}.webm"
    assert body["file_path"] is None
    assert renderer.calls == ["Dr. Alice"]
    assert hosting.blobs[video_id] == b"AABB|Dr. Alice"
    assert hosting.captions[video_id] == "Dr. Alice"
    # Nothing is left behind locally
    assert list((video_root / video_id).iterdir()) == []
    assert doctor_repo.docs[doctor["id"]].video_url == body["video_url"]


def test_finalize_upload_failure_keeps_chunks(remote_client, hosting, video_root):
    hosting.fail_upload = True
    upload_chunk(remote_client, "vid-1", b"AA")

    response = remote_client.post("/finishUpload/vid-1")

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "FINALIZE_FAILED"
    assert "upload rejected" in body["details"]["error"]
    names = [p.name for p in (video_root / "vid-1").iterdir()]
    assert len(names) == 1 and names[0].startswith("000000-")


def test_finalize_without_owner_skips_caption(remote_client, hosting, renderer):
    upload_chunk(remote_client, "orphan", b"AA")

    response = remote_client.post("/finishUpload/orphan")

    assert response.status_code == 200
    assert renderer.calls == []
    assert hosting.blobs["orphan"] == b"AA"


def test_list_probes_remote_when_url_missing(remote_client, hosting, doctor_repo):
    doctor = create_doctor(remote_client)
    hosting.blobs[doctor["video_id"]] = b"legacy"

    listed = remote_client.get("/doctors").json()

    assert listed[0]["video_url"] == f"{FakeHostingService.base_url}/{doctor['video_id']}.webm"


def test_list_degrades_to_null_when_probe_fails(remote_client, hosting):
    create_doctor(remote_client, name="Dr. One", email="one@x.com")
    create_doctor(remote_client, name="Dr. Two", email="two@x.com")
    hosting.fail_lookup = True

    response = remote_client.get("/doctors")

    assert response.status_code == 200
    assert [d["video_url"] for d in response.json()] == [None, None]


def test_failed_lookup_only_blanks_that_doctor(remote_client, hosting):
    first = create_doctor(remote_client, name="Dr. One", email="one@x.com")
    second = create_doctor(remote_client, name="Dr. Two", email="two@x.com")
    hosting.blobs[first["video_id"]] = b"one"
    hosting.blobs[second["video_id"]] = b"two"
    hosting.failing_lookups.add(first["video_id"])

    response = remote_client.get("/doctors")

    assert response.status_code == 200
    assert [(d["name"], d["video_url"]) for d in response.json()] == [
        ("Dr. Two", f"{FakeHostingService.base_url}/{second['video_id']}.webm"),
        ("Dr. One", None),
    ]


def test_owner_lookup_failure_leaves_no_merged_file(remote_client, doctor_repo, video_root, monkeypatch):
    upload_chunk(remote_client, "vid-1", b"AA")

    async def broken_lookup(video_id):
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(doctor_repo, "find_by_video_id", broken_lookup)

    response = remote_client.post("/finishUpload/vid-1")

    assert response.status_code == 500
    names = [p.name for p in (video_root / "vid-1").iterdir()]
    assert len(names) == 1 and names[0].startswith("000000-")


def test_delete_video_removes_remote_copy(remote_client, hosting):
    doctor = create_doctor(remote_client)
    video_id = doctor["video_id"]
    upload_chunk(remote_client, video_id, b"AA")
    remote_client.post(f"/finishUpload/{video_id}")
    assert video_id in hosting.blobs

    response = remote_client.delete(f"/deleteVideo/{video_id}")

    assert response.status_code == 200
    assert response.json()["remote_deleted"] is True
    assert video_id not in hosting.blobs


def test_delete_doctor_removes_remote_copy(remote_client, hosting):
    doctor = create_doctor(remote_client)
    video_id = doctor["video_id"]
    upload_chunk(remote_client, video_id, b"AA")
    remote_client.post(f"/finishUpload/{video_id}")

    assert remote_client.delete(f"/doctors/{doctor['id']}").status_code == 200
    assert video_id not in hosting.blobs
