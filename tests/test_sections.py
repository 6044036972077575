"""Tests for section and section item endpoints."""

import json

from src.config import get_settings
from src.models.section import Section, SectionItem


def _section(client, profile_id, name="Travel", icon="fa-solid fa-plane"):
    response = client.post(
        "/api/sections/section", json={"name": name, "icon": icon, "profileId": profile_id}
    )
    assert response.status_code == 200
    return response.json()


def _item(client, section_id, files=None, **fields):
    return client.post(
        "/api/sections/section/item",
        data={"sectionId": str(section_id), **fields},
        files=files,
    )


def test_create_section(client, db, profile):
    """Test creating a section for a profile."""
    data = _section(client, profile["profileId"])
    assert data["name"] == "Travel"
    assert data["icon"] == "fa-solid fa-plane"

    section = db.query(Section).filter(Section.id == data["id"]).first()
    assert section.user_id == profile["userId"]
    assert section.section_order == 0


def test_create_section_with_user_id(client, db, profile):
    """Test a raw user id is accepted in place of a profile id."""
    response = client.post(
        "/api/sections/section", json={"name": "Books", "userId": profile["userId"]}
    )
    assert response.status_code == 200
    section = db.query(Section).filter(Section.id == response.json()["id"]).first()
    assert section.user_id == profile["userId"]


def test_create_section_requires_name(client, profile):
    """Test a section without a name is rejected."""
    response = client.post("/api/sections/section", json={"profileId": profile["profileId"]})
    assert response.status_code == 400
    assert "name" in response.json()["error"]


def test_list_sections(client, profile):
    """Test listing sections, including the singular alias."""
    _section(client, profile["profileId"], name="One")
    _section(client, profile["profileId"], name="Two")

    for path in ("/api/sections/sections", "/api/sections/section"):
        response = client.get(path, params={"profileId": profile["profileId"]})
        assert response.status_code == 200
        assert [s["name"] for s in response.json()["sections"]] == ["One", "Two"]


def test_update_section(client, profile):
    """Test renaming a section."""
    section = _section(client, profile["profileId"])
    response = client.put(
        f"/api/sections/section/{section['id']}",
        json={"name": "Trips", "profileId": profile["profileId"]},
    )
    assert response.status_code == 200

    sections = client.get("/api/sections/sections", params={"profileId": profile["profileId"]})
    assert sections.json()["sections"][0]["name"] == "Trips"
    assert sections.json()["sections"][0]["icon"] == "fa-solid fa-plane"


def test_update_section_of_other_profile(client, profile):
    """Test a section owned by another profile is reported as missing."""
    section = _section(client, profile["profileId"])
    other = client.post(
        "/api/profile/create",
        data={
            "name": "Other",
            "username": "other_user",
            "intro_text": "Hi",
            "highlights": "One",
            "securityCode": "code",
        },
    ).json()

    response = client.put(
        f"/api/sections/section/{section['id']}",
        json={"name": "Hijacked", "profileId": other["profileId"]},
    )
    assert response.status_code == 404

    sections = client.get("/api/sections/sections", params={"profileId": profile["profileId"]})
    assert sections.json()["sections"][0]["name"] == "Travel"


def test_add_item_with_files(client, media_store, profile):
    """Test items store every upload as a multiple attachment list."""
    section = _section(client, profile["profileId"])
    response = _item(
        client,
        section["id"],
        files=[
            ("files", ("a.png", b"a", "image/png")),
            ("files", ("b.mp4", b"b", "video/mp4")),
        ],
        title="Japan",
    )
    assert response.status_code == 200
    data = response.json()
    assert data["file_type"] == "multiple"
    assert json.loads(data["file_path"]) == [
        {"path": media_store.stored[0].url, "type": "image"},
        {"path": media_store.stored[1].url, "type": "video"},
    ]
    assert [f["type"] for f in data["files"]] == ["image", "video"]


def test_add_item_without_files(client, profile):
    """Test items without files have no attachment."""
    section = _section(client, profile["profileId"])
    response = _item(client, section["id"], title="Plain", description="Just text")
    assert response.status_code == 200
    assert response.json()["file_path"] is None
    assert response.json()["file_type"] is None
    assert response.json()["files"] == []


def test_add_item_to_missing_section(client, media_store, profile):
    """Test adding an item to an unknown section."""
    response = _item(
        client, 9999, title="Orphan", files=[("files", ("a.png", b"a", "image/png"))]
    )
    assert response.status_code == 404
    assert response.json()["error"] == "Section not found"
    assert media_store.stored == []


def test_add_item_requires_section_id(client, profile):
    """Test the section id is required."""
    response = client.post("/api/sections/section/item", data={"title": "No section"})
    assert response.status_code == 400


def test_add_item_too_many_files(client, profile):
    """Test the per-request file limit."""
    section = _section(client, profile["profileId"])
    files = [("files", (f"{i}.png", b"x", "image/png")) for i in range(11)]
    response = _item(client, section["id"], files=files, title="Too many")
    assert response.status_code == 400
    assert "Too many files" in response.json()["error"]


def test_list_items(client, profile):
    """Test items are listed in insertion order."""
    section = _section(client, profile["profileId"])
    _item(client, section["id"], title="first")
    _item(client, section["id"], title="second")

    response = client.get("/api/sections/section/items", params={"sectionId": section["id"]})
    assert response.status_code == 200
    assert [i["title"] for i in response.json()["items"]] == ["first", "second"]


def test_update_item_keeps_existing_and_appends_new(client, db, media_store, profile):
    """Test existing files [A, B] plus upload C persist as [A, B, C]."""
    section = _section(client, profile["profileId"])
    created = _item(
        client,
        section["id"],
        title="Gallery",
        files=[
            ("files", ("a.png", b"a", "image/png")),
            ("files", ("b.png", b"b", "image/png")),
        ],
    ).json()
    existing = json.loads(created["file_path"])

    response = client.put(
        f"/api/sections/section/item/{created['id']}",
        data={"title": "Gallery", "existingFiles": json.dumps(existing)},
        files=[("files", ("c.jpg", b"c", "image/jpeg"))],
    )
    assert response.status_code == 200
    assert response.json()["message"] == "Item updated successfully"

    item = db.query(SectionItem).filter(SectionItem.id == created["id"]).first()
    assert item.file_type == "multiple"
    assert json.loads(item.file_path) == existing + [
        {"path": media_store.stored[2].url, "type": "image"}
    ]
    assert media_store.deleted == []


def test_update_item_drops_files_without_deleting_them(client, db, media_store, profile):
    """Test files left out of existingFiles stay on the media host by default."""
    section = _section(client, profile["profileId"])
    created = _item(
        client,
        section["id"],
        title="Gallery",
        files=[
            ("files", ("a.png", b"a", "image/png")),
            ("files", ("b.png", b"b", "image/png")),
        ],
    ).json()
    a, b = json.loads(created["file_path"])

    response = client.put(
        f"/api/sections/section/item/{created['id']}",
        data={"existingFiles": json.dumps([b])},
    )
    assert response.status_code == 200

    item = db.query(SectionItem).filter(SectionItem.id == created["id"]).first()
    assert json.loads(item.file_path) == [b]
    assert item.title == "Gallery"
    assert media_store.deleted == []


def test_update_item_reconcile_deletes_dropped_files(
    client, db, media_store, profile, monkeypatch
):
    """Test dropped files are deleted from the media host when reconciliation is on."""
    monkeypatch.setattr(get_settings(), "reconcile_removed_attachments", True)
    section = _section(client, profile["profileId"])
    created = _item(
        client,
        section["id"],
        title="Gallery",
        files=[
            ("files", ("a.png", b"a", "image/png")),
            ("files", ("b.png", b"b", "image/png")),
        ],
    ).json()
    a, b = json.loads(created["file_path"])

    response = client.put(
        f"/api/sections/section/item/{created['id']}",
        data={"existingFiles": json.dumps([b])},
    )
    assert response.status_code == 200

    item = db.query(SectionItem).filter(SectionItem.id == created["id"]).first()
    assert json.loads(item.file_path) == [b]
    assert media_store.deleted_ids == [media_store.stored[0].public_id]


def test_update_item_reconcile_runs_after_commit(client, db, media_store, profile, monkeypatch):
    """Test dropped files are deleted only once the new list is saved."""
    monkeypatch.setattr(get_settings(), "reconcile_removed_attachments", True)
    section = _section(client, profile["profileId"])
    created = _item(
        client, section["id"], title="One", files=[("files", ("a.png", b"a", "image/png"))]
    ).json()

    pending_at_delete = []
    original_delete = media_store.delete

    async def delete(public_id, resource_type="image"):
        pending_at_delete.append(bool(db.dirty))
        await original_delete(public_id, resource_type)

    monkeypatch.setattr(media_store, "delete", delete)

    response = client.put(
        f"/api/sections/section/item/{created['id']}",
        files=[("files", ("b.png", b"b", "image/png"))],
    )
    assert response.status_code == 200
    assert pending_at_delete == [False]
    assert media_store.deleted_ids == [media_store.stored[0].public_id]


def test_update_item_reconcile_delete_failure_keeps_update(
    client, db, media_store, profile, monkeypatch
):
    """Test a failing media host delete does not undo the saved update."""
    monkeypatch.setattr(get_settings(), "reconcile_removed_attachments", True)
    section = _section(client, profile["profileId"])
    created = _item(
        client, section["id"], title="One", files=[("files", ("a.png", b"a", "image/png"))]
    ).json()
    media_store.fail_deletes = True

    response = client.put(
        f"/api/sections/section/item/{created['id']}",
        files=[("files", ("b.png", b"b", "image/png"))],
    )
    assert response.status_code == 200

    item = db.query(SectionItem).filter(SectionItem.id == created["id"]).first()
    assert json.loads(item.file_path) == [{"path": media_store.stored[1].url, "type": "image"}]


def test_update_item_empty_keep_list_leaves_files(client, db, media_store, profile):
    """Test an empty existingFiles list without uploads leaves attachments alone."""
    section = _section(client, profile["profileId"])
    created = _item(
        client, section["id"], title="One", files=[("files", ("a.png", b"a", "image/png"))]
    ).json()

    response = client.put(
        f"/api/sections/section/item/{created['id']}",
        data={"title": "Renamed", "existingFiles": "[]"},
    )
    assert response.status_code == 200

    item = db.query(SectionItem).filter(SectionItem.id == created["id"]).first()
    assert item.title == "Renamed"
    assert item.file_path == created["file_path"]
    assert item.file_type == "multiple"
    assert media_store.deleted == []


def test_update_item_fields_only(client, db, media_store, profile):
    """Test an update without files or keep list leaves attachments alone."""
    section = _section(client, profile["profileId"])
    created = _item(
        client, section["id"], title="One", files=[("files", ("a.png", b"a", "image/png"))]
    ).json()

    response = client.put(
        f"/api/sections/section/item/{created['id']}", data={"description": "Updated"}
    )
    assert response.status_code == 200

    item = db.query(SectionItem).filter(SectionItem.id == created["id"]).first()
    assert item.description == "Updated"
    assert item.file_path == created["file_path"]
    assert media_store.deleted == []


def test_update_item_malformed_existing_files(client, profile):
    """Test a malformed keep list is rejected."""
    section = _section(client, profile["profileId"])
    created = _item(client, section["id"], title="One").json()

    response = client.put(
        f"/api/sections/section/item/{created['id']}", data={"existingFiles": "{not json"}
    )
    assert response.status_code == 400


def test_update_item_rejects_non_string_type(client, db, media_store, profile):
    """Test a keep list entry with a non-string type is rejected with 400."""
    section = _section(client, profile["profileId"])
    created = _item(
        client, section["id"], title="One", files=[("files", ("a.png", b"a", "image/png"))]
    ).json()
    url = media_store.stored[0].url

    response = client.put(
        f"/api/sections/section/item/{created['id']}",
        data={"existingFiles": json.dumps([{"path": url, "type": 5}])},
    )
    assert response.status_code == 400

    item = db.query(SectionItem).filter(SectionItem.id == created["id"]).first()
    assert item.file_path == created["file_path"]

    view = client.get(f"/api/profile/{profile['profileId']}")
    assert view.status_code == 200
    items = client.get("/api/sections/section/items", params={"sectionId": section["id"]})
    assert items.status_code == 200
    assert items.json()["items"][0]["files"] == [{"path": url, "type": "image"}]


def test_profile_view_skips_stored_entries_with_bad_type(client, db, profile):
    """Test rows written with a non-string attachment type still render."""
    section = _section(client, profile["profileId"])
    url = "https://res.cloudinary.com/demo/image/upload/v1/content-files/old.png"
    item = SectionItem(
        section_id=section["id"],
        title="Old",
        file_path=json.dumps([{"path": url, "type": 5}, {"path": url, "type": "file"}]),
        file_type="multiple",
    )
    db.add(item)
    db.commit()

    view = client.get(f"/api/profile/{profile['profileId']}")
    assert view.status_code == 200
    items = client.get("/api/sections/section/items", params={"sectionId": section["id"]})
    assert items.status_code == 200
    assert items.json()["items"][0]["files"] == [{"path": url, "type": "document"}]


def test_update_missing_item(client, profile):
    """Test updating an unknown item."""
    response = client.put("/api/sections/section/item/9999", data={"title": "x"})
    assert response.status_code == 404
    assert response.json()["error"] == "Item not found"


def test_delete_item_deletes_every_attachment(client, db, media_store, profile):
    """Test deleting an item removes all of its files."""
    section = _section(client, profile["profileId"])
    created = _item(
        client,
        section["id"],
        title="Gallery",
        files=[
            ("files", ("a.png", b"a", "image/png")),
            ("files", ("b.mov", b"b", "video/quicktime")),
        ],
    ).json()

    response = client.delete(f"/api/sections/section/item/{created['id']}")
    assert response.status_code == 200
    assert media_store.deleted == [
        (media_store.stored[0].public_id, "image"),
        (media_store.stored[1].public_id, "video"),
    ]
    assert db.query(SectionItem).filter(SectionItem.id == created["id"]).first() is None


def test_delete_item_with_legacy_single_url(client, db, media_store, profile):
    """Test items written before multi-file support are still cleaned up."""
    section = _section(client, profile["profileId"])
    item = SectionItem(
        section_id=section["id"],
        title="Old",
        file_path="https://res.cloudinary.com/demo/image/upload/v1/content-files/legacy.png",
        file_type="image",
    )
    db.add(item)
    db.commit()

    response = client.delete(f"/api/sections/section/item/{item.id}")
    assert response.status_code == 200
    assert media_store.deleted == [("content-files/legacy", "image")]


def test_delete_section_cascades_to_items(client, db, media_store, profile):
    """Test deleting a section removes its items and their files."""
    section = _section(client, profile["profileId"])
    _item(client, section["id"], title="a", files=[("files", ("a.png", b"a", "image/png"))])
    _item(client, section["id"], title="b")

    response = client.delete(f"/api/sections/section/{section['id']}")
    assert response.status_code == 200
    assert response.json()["message"] == "Section deleted"

    assert db.query(Section).filter(Section.id == section["id"]).first() is None
    assert db.query(SectionItem).filter(SectionItem.section_id == section["id"]).count() == 0
    assert media_store.deleted_ids == [media_store.stored[0].public_id]


def test_delete_missing_section(client, profile):
    """Test deleting an unknown section."""
    response = client.delete("/api/sections/section/9999")
    assert response.status_code == 404
