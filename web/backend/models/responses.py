#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field

from .requests import ApiModel


class SuccessResponse(ApiModel):
    success: bool = True


# --- Retirement -------------------------------------------------------------

class RetirementPlanResponse(ApiModel):
    id: str
    user_id: str
    created_at: Optional[str]
    updated_at: Optional[str]
    status: str
    first_name: str
    last_name: str
    email: str
    phone: str
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    age: int
    retirement_age: int
    current_savings: float
    monthly_contribution: Optional[float] = None
    employer_match: Optional[float] = None
    has_advisor: bool
    appointment_date_time: Optional[str]
    appointment_confirmed: bool
    advisor_id: Optional[str] = None
    advisor_name: Optional[str] = None
    document_ids: List[str]
    recommendations: Optional[Dict[str, Any]] = None


class DocumentResponse(ApiModel):
    id: str
    user_id: str
    file_name: str
    file_type: str
    file_size: int
    upload_date: Optional[str]
    file_url: str


class TimeSlotResponse(ApiModel):
    time: str
    available: bool
    date_time: str


class AppointmentResponse(ApiModel):
    appointment_id: str
    user_id: str
    date_time: str
    confirmed: bool


class IncentiveTierResponse(ApiModel):
    """One tier; the lower bound is inclusive, the upper bound exclusive (None for the top tier)."""
    min_amount: float
    max_amount: Optional[float] = None
    incentive: int


class RolloverIncentiveResponse(ApiModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "tier1Amount": 500,
                "tier2Amount": 1000,
                "tier3Amount": 2000,
                "tier4Amount": 3000,
                "tier5Amount": 4000,
                "holdingPeriodMonths": 12,
            }
        }
    )

    tier1_amount: int
    tier2_amount: int
    tier3_amount: int
    tier4_amount: int
    tier5_amount: int
    holding_period_months: int
    tiers: List[IncentiveTierResponse] = Field(default_factory=list)


class IncentiveCalculationResponse(ApiModel):
    amount: float
    incentive: int
    holding_period_months: int


# --- Interview prep ---------------------------------------------------------

class InterviewPrepResponse(ApiModel):
    id: str
    user_id: str
    job_title: Optional[str] = None
    company: Optional[str] = None
    created_at: Optional[str]
    updated_at: Optional[str]
    interview_type: str
    difficulty_level: str
    focus_areas: List[str] = Field(default_factory=list)
    questions: List[Dict[str, Any]]
    company_research: Optional[Dict[str, Any]] = None
    key_skills: List[str]
    preparation_tips: List[str]
    common_mistakes: List[str]
    suggested_topics: List[str]
    technical_concepts: List[str] = Field(default_factory=list)
    behavioral_themes: List[str] = Field(default_factory=list)
    interview_structure: List[Dict[str, Any]] = Field(default_factory=list)


class SessionQuestion(ApiModel):
    question_id: str
    question: Optional[str] = None
    user_answer: Optional[str] = None
    notes: Optional[str] = None
    answered_at: Optional[str] = None


class InterviewSessionResponse(ApiModel):
    id: str
    user_id: str
    prep_id: str
    start_time: Optional[str]
    end_time: Optional[str] = None
    questions: List[SessionQuestion]
    notes: Optional[str] = None
    overall_feedback: Optional[str] = None
    recording_url: Optional[str] = None


class InterviewFeedbackResponse(ApiModel):
    id: str
    user_id: str
    prep_id: str
    session_id: Optional[str] = None
    created_at: Optional[str]
    strengths: List[str]
    weaknesses: List[str]
    improvement_suggestions: List[str]
    overall_rating: int = Field(ge=1, le=10)
    specific_feedback: List[Dict[str, Any]] = Field(default_factory=list)
    question_feedback: List[Dict[str, Any]] = Field(default_factory=list)
    next_steps: List[str] = Field(default_factory=list)


# --- Cover letters ----------------------------------------------------------

class CoverLetterResponse(ApiModel):
    id: str
    user_id: str
    title: str
    style: str
    tone: Optional[str] = None
    length: Optional[str] = None
    version: int
    created_at: Optional[str]
    updated_at: Optional[str]
    content: str
    greeting: Optional[str] = None
    closing: Optional[str] = None
    signature: Optional[str] = None
    contact_info: Dict[str, Any] = Field(default_factory=dict)
    recipient_info: Dict[str, Any] = Field(default_factory=dict)
    job_title: Optional[str] = None
    company_name: Optional[str] = None
    job_id: Optional[str] = None
    resume_id: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)
    file_url: Optional[str] = None
    is_public: bool = False


class KeywordMatches(ApiModel):
    matched: List[str]
    missing: List[str]


class CoverLetterAnalysisResponse(ApiModel):
    cover_letter_id: str
    strengths: List[str]
    weaknesses: List[str]
    suggestions: List[str]
    tone: str
    readability_score: int = Field(ge=0, le=100)
    keyword_matches: Optional[KeywordMatches] = None
    formatting_issues: List[str] = Field(default_factory=list)
    content_issues: List[str] = Field(default_factory=list)
    overall_recommendation: str


# --- Resumes ----------------------------------------------------------------

class ResumeResponse(ApiModel):
    id: str
    user_id: str
    title: str
    format: str
    version: int
    created_at: Optional[str]
    updated_at: Optional[str]
    contact_info: Dict[str, Any] = Field(default_factory=dict)
    summary: str = ""
    skills: List[str] = Field(default_factory=list)
    work_experience: List[Dict[str, Any]] = Field(default_factory=list)
    education: List[Dict[str, Any]] = Field(default_factory=list)
    projects: List[Dict[str, Any]] = Field(default_factory=list)
    certifications: List[Dict[str, Any]] = Field(default_factory=list)
    languages: List[Dict[str, Any]] = Field(default_factory=list)
    custom_sections: List[Dict[str, Any]] = Field(default_factory=list)
    file_url: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)
    target_job_title: Optional[str] = None
    target_industry: Optional[str] = None
    is_public: bool = False


class ResumeAnalysisResponse(ApiModel):
    resume_id: str
    job_description: str
    match_score: int = Field(ge=0, le=100)
    keyword_matches: KeywordMatches
    strengths: List[str]
    weaknesses: List[str]
    improvement_suggestions: List[str]
    skill_gaps: List[str]
    recommended_skills: List[str]
    recommended_experience: List[str]
    ats_compatibility: int = Field(ge=0, le=100)
    readability_score: int = Field(ge=0, le=100)
    formatting_issues: List[str] = Field(default_factory=list)
    content_issues: List[str] = Field(default_factory=list)
    overall_recommendation: str


class ParsedResumeResponse(ApiModel):
    success: bool = True
    format: str
    data: Dict[str, Any]
    resume_id: Optional[str] = None
    file_url: Optional[str] = None


class KeywordsResponse(ApiModel):
    keywords: List[str]


class SkillsResponse(ApiModel):
    skills: List[str]


# --- Jobs -------------------------------------------------------------------

class SalaryInfo(ApiModel):
    min: Optional[float] = None
    max: Optional[float] = None
    currency: Optional[str] = None
    period: Optional[str] = None


class JobResponse(ApiModel):
    id: str
    title: str
    company: str
    location: Optional[str] = None
    description: str
    requirements: Optional[str] = None
    responsibilities: Optional[str] = None
    salary: Optional[SalaryInfo] = None
    benefits: List[str] = Field(default_factory=list)
    job_type: Optional[str] = None
    date_posted: Optional[str]
    application_url: Optional[str] = None
    source: str
    source_id: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    experience_level: Optional[str] = None
    education_level: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None
    company_type: Optional[str] = None
    remote: bool = False
    is_saved: bool = False


class SalaryRange(ApiModel):
    min: float
    max: Optional[float] = None
    label: str


class JobSearchFacets(ApiModel):
    job_types: List[str] = Field(default_factory=list)
    locations: List[str] = Field(default_factory=list)
    companies: List[str] = Field(default_factory=list)
    industries: List[str] = Field(default_factory=list)
    experience_levels: List[str] = Field(default_factory=list)
    education_levels: List[str] = Field(default_factory=list)
    salary_ranges: List[SalaryRange] = Field(default_factory=list)


class JobSearchResponse(ApiModel):
    jobs: List[JobResponse]
    total_count: int
    page: int
    page_size: int
    total_pages: int
    filters: JobSearchFacets


class SearchHistoryEntry(ApiModel):
    id: str
    user_id: str
    query: str
    location: Optional[str] = None
    timestamp: Optional[str]
    result_count: int


# --- Applications -----------------------------------------------------------

class ContactResponse(ApiModel):
    id: Optional[str] = None
    name: str
    title: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None


class InterviewResponse(ApiModel):
    id: str
    date: Optional[str]
    type: str
    notes: Optional[str] = None
    contacts: List[ContactResponse] = Field(default_factory=list)


class StatusChange(ApiModel):
    from_status: Optional[str] = None
    to_status: str
    changed_at: Optional[str]
    note: Optional[str] = None


class ApplicationResponse(ApiModel):
    id: str
    user_id: str
    job_id: Optional[str] = None
    job_title: str
    company: str
    location: Optional[str] = None
    application_date: Optional[str]
    status: str
    notes: Optional[str] = None
    next_steps: Optional[str] = None
    resume_id: Optional[str] = None
    cover_letter_id: Optional[str] = None
    interviews: List[InterviewResponse] = Field(default_factory=list)
    contacts: List[ContactResponse] = Field(default_factory=list)
    status_history: List[StatusChange] = Field(default_factory=list)
    last_updated: Optional[str]


class ApplicationStatsResponse(ApiModel):
    total_applications: int
    by_status: Dict[str, int]
    by_company: Dict[str, int]
    by_month: Dict[str, int]
    interview_rate: float
    offer_rate: float
