from __future__ import annotations

from fastapi.testclient import TestClient

NOTE = {
    "title": "Computer Networks Unit 2",
    "subject": "Computer Networks",
    "branch": "CSE",
    "semester": "6",
    "file_url": "/uploads/cn-unit2.pdf",
}


def _auth(client: TestClient, email: str, role: str = "student") -> dict:
    resp = client.post(
        "/api/auth/register",
        json={"name": "Someone", "email": email, "password": "secret123", "role": role},
    )
    return {"Authorization": f"Bearer {resp.json()['token']}"}


def test_upload_moderate_bookmark_and_rate(client: TestClient):
    uploader = _auth(client, "up@x.io")
    reader = _auth(client, "read@x.io")
    admin = _auth(client, "admin@x.io", role="admin")

    created = client.post("/api/notes", json=NOTE, headers=uploader)
    assert created.status_code == 201
    note_id = created.json()["note"]["id"]
    assert created.json()["note"]["approved"] is False

    assert client.get(f"/api/notes/{note_id}", headers=reader).status_code == 403
    assert client.get("/api/notes", headers=reader).json() == {"notes": []}

    pending = client.get("/api/notes/admin/pending", headers=admin)
    assert [n["id"] for n in pending.json()["notes"]] == [note_id]

    approved = client.post(f"/api/notes/{note_id}/approve", headers=admin)
    assert approved.status_code == 200
    assert approved.json()["note"]["approved"] is True

    listed = client.get("/api/notes", params={"branch": "CSE", "q": "networks"}, headers=reader)
    assert [n["id"] for n in listed.json()["notes"]] == [note_id]

    download = client.post(f"/api/notes/{note_id}/download", headers=reader)
    assert download.json()["note"]["downloads"] == 1

    rated = client.post(f"/api/notes/{note_id}/rate", json={"rating": 4}, headers=reader)
    assert rated.json()["note"]["average_rating"] == 4.0
    assert client.post(f"/api/notes/{note_id}/rate", json={"rating": 9}, headers=reader).status_code == 400

    toggled = client.post(f"/api/notes/{note_id}/bookmark", headers=reader)
    assert toggled.json() == {"bookmarked": True}
    bookmarks = client.get("/api/notes/me/bookmarks", headers=reader)
    assert [n["id"] for n in bookmarks.json()["notes"]] == [note_id]
    assert client.get("/api/dashboard/stats", headers=reader).json()["bookmarked_notes_count"] == 1

    removed = client.delete(f"/api/notes/{note_id}", headers=admin)
    assert removed.status_code == 200
    assert client.get(f"/api/notes/{note_id}", headers=reader).status_code == 404
    assert client.get("/api/dashboard/stats", headers=reader).json()["bookmarked_notes_count"] == 0


def test_non_admin_gets_forbidden_on_moderation_routes(client: TestClient):
    student = _auth(client, "student@x.io")
    note_id = client.post("/api/notes", json=NOTE, headers=student).json()["note"]["id"]

    assert client.get("/api/notes/admin/pending", headers=student).status_code == 403
    assert client.post(f"/api/notes/{note_id}/approve", headers=student).status_code == 403
    assert client.post(f"/api/notes/{note_id}/reject", headers=student).status_code == 403
    resp = client.delete(f"/api/notes/{note_id}", headers=student)
    assert resp.status_code == 403
    assert resp.json() == {"message": "Forbidden."}


def test_invalid_upload_and_missing_note(client: TestClient):
    student = _auth(client, "s2@x.io")
    assert client.post("/api/notes", json={**NOTE, "title": ""}, headers=student).status_code == 400
    assert client.get("/api/notes/nope", headers=student).status_code == 404
    assert client.post("/api/notes/nope/bookmark", headers=student).status_code == 404
    assert client.get("/api/notes").status_code == 401
