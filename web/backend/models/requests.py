#!/usr/bin/env python3
"""
Request models for API endpoints.

Bodies use camelCase keys on the wire; snake_case names are accepted too.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from core.enums import (
    ApplicationStatus,
    CoverLetterLength,
    CoverLetterStyle,
    CoverLetterTone,
    DifficultyLevel,
    InterviewType,
    ResumeFormat,
    RetirementPlanStatus,
)


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _check_email(value: str) -> str:
    value = value.strip()
    local, _, domain = value.partition('@')
    if not local or '.' not in domain:
        raise ValueError('Invalid email address')
    return value


# --- Retirement -------------------------------------------------------------

class RetirementPlanRequest(ApiModel):
    """Request to create a retirement plan and book the advisor consultation."""
    user_id: str
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    phone: str = Field(min_length=7)
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    age: int = Field(ge=18, le=120)
    retirement_age: int = Field(ge=18, le=120)
    current_savings: float = Field(ge=0)
    monthly_contribution: Optional[float] = Field(None, ge=0)
    employer_match: Optional[float] = Field(None, ge=0)
    has_advisor: bool = False
    document_ids: List[str] = Field(min_length=1, description="At least one uploaded document id")
    appointment_date_time: datetime

    @field_validator('email')
    @classmethod
    def email_must_look_valid(cls, value: str) -> str:
        return _check_email(value)

    @model_validator(mode='after')
    def retirement_age_after_age(self):
        if self.retirement_age <= self.age:
            raise ValueError('retirementAge must be greater than age')
        return self


class RetirementPlanUpdate(ApiModel):
    """Partial update; only provided fields change."""
    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    age: Optional[int] = Field(None, ge=18, le=120)
    retirement_age: Optional[int] = Field(None, ge=18, le=120)
    current_savings: Optional[float] = Field(None, ge=0)
    monthly_contribution: Optional[float] = Field(None, ge=0)
    employer_match: Optional[float] = Field(None, ge=0)
    has_advisor: Optional[bool] = None
    document_ids: Optional[List[str]] = None
    status: Optional[RetirementPlanStatus] = None
    advisor_id: Optional[str] = None
    advisor_name: Optional[str] = None
    recommendations: Optional[Dict[str, Any]] = None
    appointment_date_time: Optional[datetime] = None

    @field_validator('email')
    @classmethod
    def email_must_look_valid(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else _check_email(value)


class AppointmentRequest(ApiModel):
    user_id: str
    date_time: datetime
    plan_id: Optional[str] = None


# --- Interview prep ---------------------------------------------------------

class InterviewPrepRequest(ApiModel):
    user_id: str
    job_description: str = Field(min_length=1)
    job_title: Optional[str] = None
    company: Optional[str] = None
    resume_id: Optional[str] = None
    interview_type: InterviewType
    difficulty_level: DifficultyLevel
    focus_areas: List[str] = Field(default_factory=list)
    include_company_research: bool = False


class InterviewPrepUpdate(ApiModel):
    job_title: Optional[str] = None
    company: Optional[str] = None
    questions: Optional[List[Dict[str, Any]]] = None
    key_skills: Optional[List[str]] = None
    preparation_tips: Optional[List[str]] = None
    common_mistakes: Optional[List[str]] = None
    suggested_topics: Optional[List[str]] = None
    technical_concepts: Optional[List[str]] = None
    behavioral_themes: Optional[List[str]] = None
    interview_structure: Optional[List[Dict[str, Any]]] = None
    company_research: Optional[Dict[str, Any]] = None

    @field_validator('questions')
    @classmethod
    def questions_need_id_and_text(cls, questions):
        if questions is None:
            return questions
        for q in questions:
            if not q.get('id') or not q.get('question'):
                raise ValueError('Each question needs an id and question text')
        return questions


class StartSessionRequest(ApiModel):
    prep_id: str
    user_id: str


class EndSessionRequest(ApiModel):
    notes: Optional[str] = None
    overall_feedback: Optional[str] = None
    recording_url: Optional[str] = None


class QuestionAnswerRequest(ApiModel):
    user_answer: str
    notes: Optional[str] = None


# --- Cover letters ----------------------------------------------------------

class CoverLetterGenerateRequest(ApiModel):
    user_id: str
    resume_id: Optional[str] = None
    job_id: Optional[str] = None
    job_title: Optional[str] = None
    job_description: str = Field(min_length=1)
    company_name: str = Field(min_length=1)
    company_info: Optional[str] = None
    recipient_name: Optional[str] = None
    recipient_title: Optional[str] = None
    style: CoverLetterStyle = CoverLetterStyle.STANDARD
    custom_greeting: Optional[str] = None
    custom_closing: Optional[str] = None
    custom_signature: Optional[str] = None
    emphasize_skills: List[str] = Field(default_factory=list)
    emphasize_experiences: List[str] = Field(default_factory=list)
    tone: CoverLetterTone = CoverLetterTone.FORMAL
    length: CoverLetterLength = CoverLetterLength.MEDIUM
    include_references: bool = False
    include_availability: bool = False
    availability_date: Optional[str] = None
    additional_instructions: Optional[str] = None


class CoverLetterUpdate(ApiModel):
    title: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = Field(None, min_length=1)
    greeting: Optional[str] = None
    closing: Optional[str] = None
    signature: Optional[str] = None
    style: Optional[CoverLetterStyle] = None
    contact_info: Optional[Dict[str, Any]] = None
    recipient_info: Optional[Dict[str, Any]] = None
    job_title: Optional[str] = None
    company_name: Optional[str] = None
    keywords: Optional[List[str]] = None
    is_public: Optional[bool] = None


class CoverLetterStyleRequest(ApiModel):
    style: CoverLetterStyle


# --- Resumes ----------------------------------------------------------------

class CustomSection(ApiModel):
    title: str
    content: str


class ResumeGenerateRequest(ApiModel):
    user_id: str
    job_description: str = Field(min_length=1)
    format: ResumeFormat = ResumeFormat.STANDARD
    emphasize_skills: List[str] = Field(default_factory=list)
    include_projects: bool = True
    custom_sections: List[CustomSection] = Field(default_factory=list)
    target_job_title: Optional[str] = None
    target_industry: Optional[str] = None
    use_existing_resume_id: Optional[str] = None
    title: Optional[str] = None


class ResumeUpdate(ApiModel):
    title: Optional[str] = Field(None, min_length=1)
    format: Optional[ResumeFormat] = None
    contact_info: Optional[Dict[str, Any]] = None
    summary: Optional[str] = None
    skills: Optional[List[str]] = None
    work_experience: Optional[List[Dict[str, Any]]] = None
    education: Optional[List[Dict[str, Any]]] = None
    projects: Optional[List[Dict[str, Any]]] = None
    certifications: Optional[List[Dict[str, Any]]] = None
    languages: Optional[List[Dict[str, Any]]] = None
    custom_sections: Optional[List[Dict[str, Any]]] = None
    keywords: Optional[List[str]] = None
    target_job_title: Optional[str] = None
    target_industry: Optional[str] = None
    is_public: Optional[bool] = None


class ResumeFormatRequest(ApiModel):
    format: ResumeFormat


class ResumeAnalyzeRequest(ApiModel):
    job_description: str = Field(min_length=1)


class AnalyzeMatchRequest(ApiModel):
    resume_id: str
    job_description: str = Field(min_length=1)


class ParseTextRequest(ApiModel):
    text: str = Field(min_length=1)


class KeywordsRequest(ApiModel):
    job_description: str = Field(min_length=1)


class ExtractSkillsRequest(ApiModel):
    content: str = Field(min_length=1)


# --- Jobs -------------------------------------------------------------------

class SaveJobRequest(ApiModel):
    job_id: str
    user_id: str


# --- Applications -----------------------------------------------------------

class ContactInput(ApiModel):
    name: str = Field(min_length=1)
    title: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None


class InterviewInput(ApiModel):
    date: datetime
    type: str = Field(min_length=1)
    notes: Optional[str] = None
    contacts: List[ContactInput] = Field(default_factory=list)


class ApplicationCreateRequest(ApiModel):
    user_id: str
    job_id: Optional[str] = None
    job_title: str = Field(min_length=1)
    company: str = Field(min_length=1)
    location: Optional[str] = None
    application_date: Optional[datetime] = None
    status: ApplicationStatus = ApplicationStatus.SAVED
    notes: Optional[str] = None
    next_steps: Optional[str] = None
    resume_id: Optional[str] = None
    cover_letter_id: Optional[str] = None


class ApplicationUpdateRequest(ApiModel):
    job_title: Optional[str] = Field(None, min_length=1)
    company: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = None
    application_date: Optional[datetime] = None
    status: Optional[ApplicationStatus] = None
    status_note: Optional[str] = None
    notes: Optional[str] = None
    next_steps: Optional[str] = None
    resume_id: Optional[str] = None
    cover_letter_id: Optional[str] = None
