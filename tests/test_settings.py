def test_default_settings(client):
    resp = client.get("/me/settings")
    assert resp.status_code == 200
    assert resp.json() == {
        "ok": True,
        "profile": {"username": "alice", "displayName": ""},
        "preferences": {"theme": "light"},
    }


def test_settings_require_user(client):
    assert client.get("/me/settings", headers={"X-User-Id": ""}).status_code == 401


def test_patch_preferences_merges(client):
    client.patch("/me/preferences", json={"theme": "dark", "fontSize": 14})
    resp = client.patch("/me/preferences", json={"fontSize": 16, "reduceMotion": True})
    assert resp.status_code == 200
    assert resp.json()["preferences"] == {"theme": "dark", "fontSize": 16, "reduceMotion": True}

    prefs = client.get("/me/settings").json()["preferences"]
    assert prefs == {"theme": "dark", "fontSize": 16, "reduceMotion": True}


def test_patch_profile_trims_display_name(client):
    resp = client.patch("/me/profile", json={"displayName": "  Alice L.  "})
    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "displayName": "Alice L."}
    assert client.get("/me/settings").json()["profile"]["displayName"] == "Alice L."


def test_settings_are_scoped_per_user(client):
    client.patch("/me/preferences", json={"theme": "dark"})
    other = client.get("/me/settings", headers={"X-User-Id": "bob"}).json()
    assert other["preferences"] == {"theme": "light"}
    assert other["profile"]["username"] == "bob"
