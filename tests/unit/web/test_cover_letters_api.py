"""API tests for cover letter generation, editing, restyling, export and analysis."""
import io

import pytest
from pypdf import PdfReader

from core.llm.schema_models import COVER_LETTER_ANALYSIS_SCHEMA

JOB_DESCRIPTION = "We need a Python engineer with SQL and AWS experience to build data pipelines."


def _generate(client, auth, user, **overrides):
    body = {
        "userId": str(user.id),
        "jobTitle": "Data Engineer",
        "jobDescription": JOB_DESCRIPTION,
        "companyName": "Acme",
        "recipientName": "Ms. Rivera",
    }
    body.update(overrides)
    return client.post("/api/cover-letters/generate", json=body, headers=auth)


@pytest.fixture
def letter(client, auth, user, ai):
    ai.generate_text.return_value = "I build reliable Python and SQL pipelines."
    response = _generate(client, auth, user)
    assert response.status_code == 201
    return response.json()


class TestGenerate:

    def test_defaults_and_derived_fields(self, letter, user):
        assert letter["title"] == "Cover Letter - Data Engineer at Acme"
        assert letter["version"] == 1
        assert letter["style"] == "standard"
        assert letter["tone"] == "formal"
        assert letter["length"] == "medium"
        assert letter["greeting"] == "Dear Ms. Rivera,"
        assert letter["closing"] == "Sincerely,"
        assert letter["signature"] == "Jane Doe"
        assert letter["contactInfo"]["email"] == user.email
        assert letter["recipientInfo"]["company"] == "Acme"
        assert "python" in letter["keywords"]

    def test_custom_greeting_and_options_reach_prompt(self, client, auth, user, ai):
        response = _generate(client, auth, user, customGreeting="Hello team,", style="technical",
                             tone="enthusiastic", length="short", emphasizeSkills=["Airflow"])

        assert response.json()["greeting"] == "Hello team,"
        prompt = ai.generate_text.call_args[0][0]
        assert "Airflow" in prompt
        assert "enthusiastic" in prompt.lower()

    def test_resume_is_included_in_prompt(self, client, auth, user, ai, db_session):
        from database.repositories import ResumeRepository
        resume = ResumeRepository(db_session).create(user.id, "Jane Doe", {"summary": "Eight years of ETL work"})
        db_session.commit()

        response = _generate(client, auth, user, resumeId=str(resume.id))

        assert response.json()["resumeId"] == str(resume.id)
        assert "Eight years of ETL work" in ai.generate_text.call_args[0][0]

    def test_unknown_job_is_404(self, client, auth, user):
        response = _generate(client, auth, user, jobId="6f1c9a52-3d1e-4b8e-9f0a-1c2d3e4f5a6b")
        assert response.status_code == 404

    def test_missing_company_is_422(self, client, auth, user):
        assert _generate(client, auth, user, companyName="").status_code == 422


class TestEditing:

    def test_content_edit_bumps_version(self, client, auth, letter):
        url = f"/api/cover-letters/{letter['id']}"

        retitled = client.put(url, json={"title": "For Acme"}, headers=auth).json()
        assert retitled["version"] == 1

        edited = client.put(url, json={"content": "A rewritten letter."}, headers=auth).json()
        assert edited["version"] == 2
        assert edited["content"] == "A rewritten letter."

        same = client.put(url, json={"content": "A rewritten letter."}, headers=auth).json()
        assert same["version"] == 2

    def test_restyle_creates_new_version(self, client, auth, letter, ai):
        ai.generate_text.return_value = "A bolder letter."

        response = client.post(f"/api/cover-letters/{letter['id']}/style",
                               json={"style": "executive"}, headers=auth)

        data = response.json()
        assert data["style"] == "executive"
        assert data["content"] == "A bolder letter."
        assert data["version"] == 2
        assert "I build reliable Python and SQL pipelines." in ai.generate_text.call_args[0][0]

    def test_list_and_delete(self, client, auth, user, letter):
        listed = client.get("/api/cover-letters", params={"userId": str(user.id)}, headers=auth).json()
        assert [c["id"] for c in listed] == [letter["id"]]

        assert client.delete(f"/api/cover-letters/{letter['id']}", headers=auth).status_code == 200
        assert client.get(f"/api/cover-letters/{letter['id']}", headers=auth).status_code == 404

    def test_other_user_is_403(self, client, other_user, letter):
        response = client.put(f"/api/cover-letters/{letter['id']}", json={"title": "Mine"},
                              headers={"X-User-Id": str(other_user.id)})
        assert response.status_code == 403


class TestExportAndAnalysis:

    def test_export_txt(self, client, auth, letter):
        response = client.get(f"/api/cover-letters/{letter['id']}/export", params={"format": "txt"}, headers=auth)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert 'filename="Cover_Letter_-_Data_Engineer_at_Acme.txt"' in response.headers["content-disposition"]
        text = response.content.decode("utf-8")
        assert text.index("Dear Ms. Rivera,") < text.index("Python and SQL") < text.index("Sincerely,")

    def test_export_pdf_by_default(self, client, auth, letter):
        response = client.get(f"/api/cover-letters/{letter['id']}/export", headers=auth)

        assert response.headers["content-type"] == "application/pdf"
        reader = PdfReader(io.BytesIO(response.content))
        assert "Sincerely" in "".join(page.extract_text() for page in reader.pages)

    def test_unknown_export_format_is_422(self, client, auth, letter):
        response = client.get(f"/api/cover-letters/{letter['id']}/export", params={"format": "odt"}, headers=auth)
        assert response.status_code == 422

    def test_analyze_combines_model_and_keyword_matches(self, client, auth, letter, ai):
        ai.extract_structured_data.return_value = {
            "strengths": ["Concise"],
            "weaknesses": [],
            "suggestions": ["Mention AWS"],
            "tone": "formal",
            "readabilityScore": 140,
            "formattingIssues": [],
            "contentIssues": [],
            "overallRecommendation": "Send it",
        }

        data = client.get(f"/api/cover-letters/{letter['id']}/analyze", headers=auth).json()

        assert data["readabilityScore"] == 100
        assert data["overallRecommendation"] == "Send it"
        assert "python" in data["keywordMatches"]["matched"]
        assert "aws" in data["keywordMatches"]["missing"]
        assert ai.extract_structured_data.call_args[0][1] is COVER_LETTER_ANALYSIS_SCHEMA
