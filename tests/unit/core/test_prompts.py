"""Tests for the prompt builders."""
import pytest

from core.enums import InterviewType
from core.prompts.cover_letter import build_cover_letter_prompt, build_restyle_prompt
from core.prompts.interview import (
    QUESTION_PROMPT_BUILDERS,
    build_interview_feedback_prompt,
    build_interview_prep_prompt,
    build_practice_questions_prompt,
)
from core.prompts.resume import build_resume_generation_prompt

PREP_REQUEST = {
    "job_description": "Backend engineer building payment APIs",
    "job_title": "Backend Engineer",
    "company": "Acme",
    "interview_type": "technical",
    "difficulty_level": "hard",
    "focus_areas": ["distributed systems", "SQL"],
}


class TestInterviewPrompts:

    def test_every_interview_type_has_a_builder(self):
        assert set(QUESTION_PROMPT_BUILDERS) == {t.value for t in InterviewType}

    def test_prep_prompt_uses_type_builder(self):
        prompt = build_interview_prep_prompt(PREP_REQUEST)

        assert "technical interview questions" in prompt
        assert "hard difficulty" in prompt
        assert "distributed systems, SQL" in prompt
        assert "Backend engineer building payment APIs" in prompt

    def test_prep_prompt_with_resume_builds_mock_interview(self):
        prompt = build_interview_prep_prompt(PREP_REQUEST, resume_content="Jane Doe - Python, Go")
        assert "Jane Doe - Python, Go" in prompt

    @pytest.mark.parametrize("interview_type", [t.value for t in InterviewType])
    def test_each_type_builds(self, interview_type):
        prompt = build_interview_prep_prompt({**PREP_REQUEST, "interview_type": interview_type})
        assert PREP_REQUEST["job_description"] in prompt

    def test_practice_questions_prompt(self):
        prompt = build_practice_questions_prompt("phone_screen", "easy", 5)
        assert "5 general practice questions" in prompt
        assert "phone screen" in prompt

    def test_feedback_prompt_lists_answers(self):
        prompt = build_interview_feedback_prompt(
            "behavioral",
            [{"question_id": "q1", "question": "Tell me about a conflict", "user_answer": "I listened"},
             {"question_id": "q2", "question": "Biggest failure?", "user_answer": None}],
        )

        assert "[q1] Q: Tell me about a conflict\nA: I listened" in prompt
        assert "(no answer given)" in prompt


class TestCoverLetterPrompts:

    def test_defaults_applied(self):
        prompt = build_cover_letter_prompt({"job_description": "Build APIs", "company_name": "Acme"})

        assert "250-350" in prompt
        assert "ADDRESSED TO: Hiring Manager" in prompt
        assert "Not provided" in prompt

    def test_options_rendered(self):
        prompt = build_cover_letter_prompt({
            "job_description": "Build APIs",
            "company_name": "Acme",
            "job_title": "Engineer",
            "recipient_name": "Pat Lee",
            "recipient_title": "CTO",
            "style": "technical",
            "tone": "confident",
            "length": "short",
            "emphasize_skills": ["Go", "Kafka"],
            "include_availability": True,
            "availability_date": "March 1",
        }, resume_text="Resume body")

        assert "JOB: Engineer at Acme" in prompt
        assert "ADDRESSED TO: Pat Lee, CTO" in prompt
        assert "150-200" in prompt
        assert "STYLE: technical" in prompt
        assert "confident and assertive" in prompt
        assert "Go, Kafka" in prompt
        assert "available to start March 1" in prompt
        assert "Resume body" in prompt

    def test_restyle_keeps_letter(self):
        prompt = build_restyle_prompt("Dear team, I build things.", "executive", "Acme")
        assert "Dear team, I build things." in prompt
        assert "executive" in prompt


class TestResumePrompts:

    def test_generation_prompt(self):
        prompt = build_resume_generation_prompt({
            "job_description": "Data engineer with Spark",
            "format": "ats",
            "emphasize_skills": ["Spark"],
            "include_projects": False,
        }, existing_resume="Current resume text")

        assert "Data engineer with Spark" in prompt
        assert "Current resume text" in prompt
        assert "Leave the projects list empty." in prompt
