import httpx
import pytest

from backend.app.schemas import ExperienceCreateRequest, ProfileUpsertRequest
from backend.app.services import profile_service


def test_split_skills_trims_entries():
    assert profile_service.split_skills("js, node,  react ") == ["js", "node", "react"]


def test_split_skills_single_value():
    assert profile_service.split_skills("python") == ["python"]


def test_build_profile_fields_only_includes_present_values():
    payload = ProfileUpsertRequest(
        status="Developer",
        skills="go, rust",
        company="",
        bio="Hi",
        twitter="https://twitter.com/a",
    )

    fields, social = profile_service.build_profile_fields(payload)
    assert fields == {"status": "Developer", "bio": "Hi", "skills": ["go", "rust"]}
    assert social == {"twitter": "https://twitter.com/a"}


def test_find_sub_record_index():
    records = [{"id": "a"}, {"id": "b"}, {"id": "c"}]

    assert profile_service.find_sub_record_index(records, "b") == 1
    assert profile_service.find_sub_record_index(records, "z") == -1
    assert profile_service.find_sub_record_index([], "a") == -1


def test_remove_at_not_found_position_drops_last():
    records = [{"id": "a"}, {"id": "b"}]

    assert profile_service.remove_at(records, -1) == [{"id": "a"}]
    # Input is not mutated
    assert records == [{"id": "a"}, {"id": "b"}]


def test_remove_at_empty_list():
    assert profile_service.remove_at([], -1) == []


def test_experience_payload_dump_uses_from_key():
    payload = ExperienceCreateRequest.model_validate(
        {"title": "Dev", "company": "Acme", "from": "2022-02-01"}
    )

    dumped = payload.model_dump(mode="json", by_alias=True)
    assert dumped["from"] == "2022-02-01"
    assert dumped["current"] is False
    assert "from_date" not in dumped


def test_github_repos_response_success():
    response = profile_service.github_repos_response("octocat", httpx.Response(200, json=[{"id": 1}]))
    assert response.status_code == 200
    assert response.body == b'[{"id":1}]'


def test_github_repos_response_non_success_still_parses_body():
    response = profile_service.github_repos_response(
        "ghost", httpx.Response(403, json={"message": "rate limited"})
    )
    assert response.status_code == 404


def test_github_repos_response_invalid_success_body_raises():
    with pytest.raises(ValueError):
        profile_service.github_repos_response("octocat", httpx.Response(200, text="nope"))
