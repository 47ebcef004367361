"""
Cover Letter Prompt Templates

Style presets select phrasing conventions; tone and length are applied on top.
"""

from typing import Any, Dict, List, Optional

STYLE_GUIDELINES = {
    "standard": "Classic three-to-four paragraph business letter: opening, qualifications, fit, closing.",
    "modern": "Concise and direct with a strong hook; short paragraphs; plain contemporary language.",
    "creative": "Open with a story or unexpected angle; show personality while staying professional.",
    "professional": "Polished and formal; emphasise track record and measurable results.",
    "executive": "Leadership-focused: strategy, scale of responsibility, business outcomes and vision.",
    "technical": "Lead with technical depth: systems built, technologies used, engineering impact.",
    "academic": "Scholarly register: research, teaching, publications and service, in that order.",
    "federal": "Explicitly map experience to the announcement's qualifications and specialized experience.",
}

TONE_GUIDELINES = {
    "formal": "formal and respectful",
    "conversational": "warm and conversational",
    "enthusiastic": "energetic and enthusiastic",
    "confident": "confident and assertive",
}

LENGTH_WORDS = {
    "short": "150-200",
    "medium": "250-350",
    "long": "400-500",
}


def _join(items: Optional[List[str]], empty: str = "None specified") -> str:
    return ", ".join(items) if items else empty


def build_cover_letter_prompt(options: Dict[str, Any], resume_text: Optional[str] = None) -> str:
    """
    Build the prompt for cover letter generation.

    Args:
        options: Generation options (job_description, company_name, style, tone, length, ...)
        resume_text: Candidate's resume content (optional)

    Returns:
        str: Formatted prompt string
    """
    style = options.get("style") or "standard"
    tone = options.get("tone") or "formal"
    length = options.get("length") or "medium"

    recipient = options.get("recipient_name") or "Hiring Manager"
    if options.get("recipient_title"):
        recipient = f"{recipient}, {options['recipient_title']}"

    extras = []
    if options.get("include_references"):
        extras.append("Mention that references are available on request.")
    if options.get("include_availability"):
        when = options.get("availability_date") or "immediately"
        extras.append(f"State that the candidate is available to start {when}.")
    if options.get("additional_instructions"):
        extras.append(options["additional_instructions"])

    return f"""Write a tailored cover letter ({LENGTH_WORDS.get(length, LENGTH_WORDS['medium'])} words).

JOB: {options.get('job_title') or 'the open position'} at {options['company_name']}
ADDRESSED TO: {recipient}

JOB DESCRIPTION:
{options['job_description']}

ABOUT THE COMPANY:
{options.get('company_info') or 'No additional information'}

CANDIDATE RESUME:
{resume_text or 'Not provided - keep claims general and do not invent specifics'}

STYLE: {style} - {STYLE_GUIDELINES.get(style, STYLE_GUIDELINES['standard'])}
TONE: {TONE_GUIDELINES.get(tone, tone)}
SKILLS TO EMPHASIZE: {_join(options.get('emphasize_skills'))}
EXPERIENCES TO EMPHASIZE: {_join(options.get('emphasize_experiences'))}
{chr(10).join(extras)}
Write the letter body now:"""


def build_restyle_prompt(content: str, style: str, company_name: Optional[str] = None) -> str:
    """Prompt for rephrasing an existing letter in a different style."""
    return f"""Rewrite this cover letter in the {style} style. Keep every factual claim, the
recipient and the overall length; change only phrasing and structure.

STYLE: {style} - {STYLE_GUIDELINES.get(style, STYLE_GUIDELINES['standard'])}
COMPANY: {company_name or 'Not specified'}

CURRENT LETTER:
{content}

Rewritten letter:"""


def build_cover_letter_analysis_prompt(content: str, job_description: Optional[str] = None) -> str:
    return f"""Review this cover letter.

Report strengths, weaknesses, concrete suggestions, the overall tone (one or two words),
a readability score, formatting issues, content issues and an overall recommendation.

COVER LETTER:
{content}

TARGET JOB DESCRIPTION:
{job_description or 'Not provided'}"""
