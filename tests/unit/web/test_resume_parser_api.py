"""API tests for resume upload parsing and keyword/skill extraction."""
import json

from core.llm.schema_models import KEYWORDS_SCHEMA, PARSED_RESUME_SCHEMA

EXTRACTED = {
    "contactInfo": {"name": "Maria Lopez", "email": "maria@example.com"},
    "summary": "Product manager",
    "skills": ["Roadmaps", "SQL"],
    "workExperience": [],
    "education": [],
    "projects": [],
    "certifications": [],
    "languages": [],
}


def _parse(client, auth, user, name, content, content_type="application/octet-stream"):
    return client.post(
        "/api/resume/parse",
        headers=auth,
        files={"file": (name, content, content_type)},
        data={"userId": str(user.id)},
    )


class TestParseUpload:

    def test_json_upload_is_stored_without_llm(self, client, auth, user, ai, uploader, db_session):
        payload = {"contactInfo": {"name": "Maria Lopez"}, "skills": ["SQL"]}

        response = _parse(client, auth, user, "maria.json", json.dumps(payload).encode(), "application/json")

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["format"] == "json"
        assert data["data"] == payload
        assert data["fileUrl"].startswith(f"https://test-bucket.s3.amazonaws.com/resumes/{user.id}/")
        ai.extract_structured_data.assert_not_called()

        from database.repositories import ResumeRepository
        stored = ResumeRepository(db_session).get_by_id(data["resumeId"])
        assert stored.title == "maria"
        assert stored.file_key == uploader.upload_bytes.call_args[0][1]

    def test_text_upload_goes_through_extraction(self, client, auth, user, ai):
        ai.extract_structured_data.return_value = dict(EXTRACTED)

        response = _parse(client, auth, user, "maria.txt", b"Maria Lopez\nProduct manager\nSQL", "text/plain")

        assert response.status_code == 201
        assert response.json()["data"]["skills"] == ["Roadmaps", "SQL"]
        assert response.json()["data"]["customSections"] == []
        prompt, schema = ai.extract_structured_data.call_args[0][:2]
        assert schema is PARSED_RESUME_SCHEMA
        assert "Maria Lopez" in prompt

    def test_unsupported_format_is_400(self, client, auth, user, uploader):
        response = _parse(client, auth, user, "resume.rtf", b"{\\rtf1}")

        assert response.status_code == 400
        assert "Supported formats" in response.json()["error"]
        uploader.upload_bytes.assert_not_called()

    def test_invalid_json_is_400(self, client, auth, user):
        assert _parse(client, auth, user, "resume.json", b"{broken").status_code == 400

    def test_empty_file_is_400(self, client, auth, user):
        assert _parse(client, auth, user, "resume.txt", b"").status_code == 400

    def test_upload_for_other_user_is_403(self, client, auth, other_user):
        response = _parse(client, auth, other_user, "resume.json", b"{}")
        assert response.status_code == 403

    def test_requires_user(self, client, user):
        response = client.post("/api/resume/parse", files={"file": ("r.json", b"{}", "application/json")},
                               data={"userId": str(user.id)})
        assert response.status_code == 401


class TestTextEndpoints:

    def test_parse_text(self, client, auth, ai):
        ai.extract_structured_data.return_value = dict(EXTRACTED)

        data = client.post("/api/resume/parse-text", json={"text": "Maria Lopez, PM"}, headers=auth).json()

        assert data["format"] == "text"
        assert data["resumeId"] is None
        assert data["data"]["contactInfo"]["name"] == "Maria Lopez"

    def test_keywords_are_deduplicated(self, client, auth, ai):
        ai.extract_structured_data.return_value = {"keywords": ["Python", "python ", "SQL", ""]}

        data = client.post("/api/resume/keywords", json={"jobDescription": "Python and SQL"}, headers=auth).json()

        assert data == {"keywords": ["Python", "SQL"]}
        assert ai.extract_structured_data.call_args[0][1] is KEYWORDS_SCHEMA

    def test_keywords_fall_back_to_local_extraction(self, client, auth, ai):
        ai.extract_structured_data.return_value = {"keywords": []}

        data = client.post("/api/resume/keywords",
                           json={"jobDescription": "Kubernetes operators, Kubernetes upgrades"},
                           headers=auth).json()

        assert data["keywords"][0] == "kubernetes"

    def test_extract_skills(self, client, auth, ai):
        ai.extract_structured_data.return_value = {"skills": ["Go", "go", "Terraform"]}

        data = client.post("/api/resume/extract-skills", json={"content": "Go and Terraform"}, headers=auth).json()
        assert data == {"skills": ["Go", "Terraform"]}

    def test_analyze_match_uses_stored_resume(self, client, auth, user, ai, db_session):
        from database.repositories import ResumeRepository
        resume = ResumeRepository(db_session).create(user.id, "Jane", {"skills": ["Python"]})
        db_session.commit()
        ai.extract_structured_data.return_value = {"overallRecommendation": "Apply"}

        data = client.post("/api/resume/analyze-match",
                           json={"resumeId": str(resume.id), "jobDescription": "Python and Rust"},
                           headers=auth).json()

        assert data["keywordMatches"] == {"matched": ["python"], "missing": ["rust"]}
        assert data["matchScore"] == 50
        assert data["overallRecommendation"] == "Apply"

    def test_empty_text_is_422(self, client, auth):
        assert client.post("/api/resume/parse-text", json={"text": ""}, headers=auth).status_code == 422
