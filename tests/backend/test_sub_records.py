PROFILE_URL = "/api/profile"
AUTH = {"Authorization": "Bearer fake"}


def _create_profile(client):
    resp = client.post(PROFILE_URL, json={"status": "Developer", "skills": "python"}, headers=AUTH)
    assert resp.status_code == 200


def _add_experience(client, title, **extra):
    body = {"title": title, "company": "Acme", "from": "2020-01-01"}
    body.update(extra)
    return client.put(f"{PROFILE_URL}/experience", json=body, headers=AUTH)


def test_add_experience_returns_profile(authorized_client, sample_experience):
    client, _, _ = authorized_client
    _create_profile(client)

    resp = client.put(f"{PROFILE_URL}/experience", json=sample_experience, headers=AUTH)
    assert resp.status_code == 200
    data = resp.json()
    assert len(data["experience"]) == 1
    entry = data["experience"][0]
    assert entry["title"] == "Backend Engineer"
    assert entry["from"] == "2021-03-01"
    assert entry["to"] == "2023-06-30"
    assert entry["current"] is False
    assert entry["id"]


def test_new_experience_is_prepended(authorized_client):
    client, _, _ = authorized_client
    _create_profile(client)

    _add_experience(client, "First")
    _add_experience(client, "Second")

    resp = client.get(f"{PROFILE_URL}/me", headers=AUTH)
    titles = [entry["title"] for entry in resp.json()["experience"]]
    assert titles == ["Second", "First"]


def test_experience_ids_are_unique(authorized_client):
    client, _, _ = authorized_client
    _create_profile(client)

    _add_experience(client, "One")
    resp = _add_experience(client, "Two")
    ids = [entry["id"] for entry in resp.json()["experience"]]
    assert len(set(ids)) == 2


def test_experience_defaults_current_to_false(authorized_client):
    client, _, _ = authorized_client
    _create_profile(client)

    resp = _add_experience(client, "Intern")
    entry = resp.json()["experience"][0]
    assert entry["current"] is False
    assert entry["to"] is None


def test_add_experience_validation_errors(authorized_client):
    client, _, _ = authorized_client
    _create_profile(client)

    resp = client.put(f"{PROFILE_URL}/experience", json={"location": "Remote"}, headers=AUTH)
    assert resp.status_code == 400
    messages = {error["param"]: error["msg"] for error in resp.json()["errors"]}
    assert messages == {
        "title": "Title is required",
        "company": "Company is required",
        "from": "From date is required",
    }


def test_add_experience_without_body_reports_each_field(authorized_client):
    client, _, _ = authorized_client
    _create_profile(client)

    resp = client.put(f"{PROFILE_URL}/experience", headers=AUTH)
    assert resp.status_code == 400
    errors = resp.json()["errors"]
    assert {error["param"]: error["msg"] for error in errors} == {
        "title": "Title is required",
        "company": "Company is required",
        "from": "From date is required",
    }
    assert {error["location"] for error in errors} == {"body"}


def test_add_education_without_body_reports_each_field(authorized_client):
    client, _, _ = authorized_client
    _create_profile(client)

    resp = client.put(f"{PROFILE_URL}/education", headers=AUTH)
    assert resp.status_code == 400
    params = sorted(error["param"] for error in resp.json()["errors"])
    assert params == ["degree", "fieldofstudy", "from", "school"]


def test_add_experience_without_profile_fails(authorized_client):
    client, _, _ = authorized_client

    resp = _add_experience(client, "Orphan")
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Server Error"


def test_delete_experience_by_id_removes_exactly_one(authorized_client):
    client, _, _ = authorized_client
    _create_profile(client)
    _add_experience(client, "A")
    _add_experience(client, "B")
    resp = _add_experience(client, "C")
    entries = resp.json()["experience"]
    target = next(entry for entry in entries if entry["title"] == "B")

    resp = client.delete(f"{PROFILE_URL}/experience/{target['id']}", headers=AUTH)
    assert resp.status_code == 200
    remaining = resp.json()["experience"]
    assert len(remaining) == len(entries) - 1
    assert [entry["title"] for entry in remaining] == ["C", "A"]


def test_delete_experience_with_unknown_id_removes_last_entry(authorized_client):
    client, _, _ = authorized_client
    _create_profile(client)
    _add_experience(client, "Oldest")
    _add_experience(client, "Newest")

    resp = client.delete(f"{PROFILE_URL}/experience/does-not-exist", headers=AUTH)
    assert resp.status_code == 200
    assert [entry["title"] for entry in resp.json()["experience"]] == ["Newest"]


def test_delete_experience_on_empty_list_is_noop(authorized_client):
    client, _, _ = authorized_client
    _create_profile(client)

    resp = client.delete(f"{PROFILE_URL}/experience/anything", headers=AUTH)
    assert resp.status_code == 200
    assert resp.json()["experience"] == []


def test_add_and_delete_education(authorized_client, sample_education):
    client, _, _ = authorized_client
    _create_profile(client)

    first = client.put(f"{PROFILE_URL}/education", json=sample_education, headers=AUTH)
    assert first.status_code == 200
    second = client.put(
        f"{PROFILE_URL}/education",
        json={**sample_education, "school": "Tech Institute", "degree": "MSc"},
        headers=AUTH,
    )
    schools = [entry["school"] for entry in second.json()["education"]]
    assert schools == ["Tech Institute", "State University"]

    target = second.json()["education"][0]["id"]
    resp = client.delete(f"{PROFILE_URL}/education/{target}", headers=AUTH)
    assert resp.status_code == 200
    assert [entry["school"] for entry in resp.json()["education"]] == ["State University"]


def test_delete_education_with_unknown_id_removes_last_entry(authorized_client, sample_education):
    client, _, _ = authorized_client
    _create_profile(client)
    client.put(f"{PROFILE_URL}/education", json=sample_education, headers=AUTH)
    client.put(f"{PROFILE_URL}/education", json={**sample_education, "school": "Later"}, headers=AUTH)

    resp = client.delete(f"{PROFILE_URL}/education/missing", headers=AUTH)
    assert [entry["school"] for entry in resp.json()["education"]] == ["Later"]


def test_add_education_validation_errors(authorized_client):
    client, _, _ = authorized_client
    _create_profile(client)

    resp = client.put(
        f"{PROFILE_URL}/education",
        json={"school": "State University", "degree": ""},
        headers=AUTH,
    )
    assert resp.status_code == 400
    messages = {error["param"]: error["msg"] for error in resp.json()["errors"]}
    assert messages == {
        "degree": "Degree is required",
        "fieldofstudy": "Field of study is required",
        "from": "From date is required",
    }


def test_experience_and_education_are_independent(authorized_client, sample_education):
    client, _, _ = authorized_client
    _create_profile(client)
    _add_experience(client, "Job")
    client.put(f"{PROFILE_URL}/education", json=sample_education, headers=AUTH)

    resp = client.delete(f"{PROFILE_URL}/education/missing", headers=AUTH)
    data = resp.json()
    assert data["education"] == []
    assert [entry["title"] for entry in data["experience"]] == ["Job"]
