"""
Resume Prompt Templates
"""

from typing import Any, Dict, List, Optional

FORMAT_GUIDELINES = {
    "standard": "Reverse-chronological layout with summary, experience, education and skills.",
    "ats": "Plain single-column structure with standard section headings and exact keyword phrasing.",
    "creative": "Distinctive voice in the summary and project highlights; still easy to scan.",
    "executive": "Lead with leadership scope, strategic impact, budgets and teams managed.",
    "technical": "Prominent technical skills section; project and system details with technologies used.",
    "academic": "CV-style emphasis on research, publications, teaching and grants.",
    "federal": "Detailed duties per position with hours, grades and explicit qualification statements.",
}


def _bullets(items: Optional[List[str]]) -> str:
    if not items:
        return "None specified"
    return "\n".join(f"- {item}" for item in items)


def build_resume_generation_prompt(options: Dict[str, Any], existing_resume: Optional[str] = None) -> str:
    """
    Build the prompt for tailored resume generation.

    Args:
        options: Generation options (job_description, format, emphasize_skills, ...)
        existing_resume: Text of the candidate's current resume, if any

    Returns:
        str: Formatted prompt string
    """
    resume_format = options.get("format") or "standard"
    projects_rule = (
        "Include a projects section." if options.get("include_projects", True)
        else "Leave the projects list empty."
    )

    return f"""Create a resume tailored to the job below.

TARGET JOB TITLE: {options.get('target_job_title') or 'Not specified'}
TARGET INDUSTRY: {options.get('target_industry') or 'Not specified'}

JOB DESCRIPTION:
{options['job_description']}

CANDIDATE'S CURRENT RESUME:
{existing_resume or 'Not provided - produce a template the candidate can fill in, using placeholder-free generic wording'}

FORMAT: {resume_format} - {FORMAT_GUIDELINES.get(resume_format, FORMAT_GUIDELINES['standard'])}
SKILLS TO EMPHASIZE:
{_bullets(options.get('emphasize_skills'))}
CUSTOM SECTIONS TO FOLD INTO THE SUMMARY OR PROJECTS:
{_bullets(options.get('custom_sections'))}
{projects_rule}

Also return the job-description keywords the resume now covers in `keywords`."""


def build_resume_analysis_prompt(resume_text: str, job_description: str) -> str:
    return f"""Analyze how well this resume fits the job description.

Return strengths, weaknesses, improvement suggestions, skill gaps, recommended skills and
experience to add, an ATS compatibility score, a readability score, formatting issues,
content issues and an overall recommendation.

RESUME:
{resume_text}

JOB DESCRIPTION:
{job_description}"""


def build_reformat_prompt(resume_json: str, resume_format: str) -> str:
    return f"""Rewrite this resume for the {resume_format} format without adding or removing facts.

FORMAT: {resume_format} - {FORMAT_GUIDELINES.get(resume_format, FORMAT_GUIDELINES['standard'])}

RESUME (JSON):
{resume_json}

Return the full resume; keep `keywords` as the important terms it contains."""


def build_resume_extraction_prompt(resume_text: str) -> str:
    return f"""Extract the structured resume data from this text.

RESUME TEXT:
{resume_text}"""


def build_keyword_prompt(job_description: str) -> str:
    return f"""List the keywords a resume should contain to pass screening for this job.

JOB DESCRIPTION:
{job_description}"""


def build_skills_prompt(resume_text: str) -> str:
    return f"""List every skill mentioned in this resume: technical skills, tools, methods and
relevant soft skills, exactly as written.

RESUME:
{resume_text}"""
