"""
Interview preparation prompt templates.

One builder per interview type, plus company research, session feedback,
preparation tips and resume-based mock interviews.
"""

from typing import Any, Dict, List, Optional

DEFAULT_QUESTION_COUNT = 8


def _focus(focus_areas: Optional[List[str]]) -> str:
    return ", ".join(focus_areas) if focus_areas else "None specified"


def build_behavioral_prompt(job_description: str, count: int,
                            focus_areas: Optional[List[str]] = None, **_: Any) -> str:
    return f"""Generate {count} behavioral interview questions likely to be asked for this position.

For each question provide:
1. The question itself
2. The skill or quality being assessed (as the category)
3. A suggested approach using the STAR method (as tips)
4. An example of a strong answer (as suggestedAnswer)

JOB DESCRIPTION:
{job_description}

FOCUS AREAS: {_focus(focus_areas)}"""


def build_technical_prompt(job_description: str, count: int, difficulty_level: str,
                           focus_areas: Optional[List[str]] = None, **_: Any) -> str:
    return f"""Generate {count} technical interview questions likely to be asked for this position.
Questions must be at {difficulty_level} difficulty.

For each question provide:
1. The question itself
2. The technical concept being assessed (as the category)
3. A detailed answer that demonstrates understanding (as suggestedAnswer)
4. Follow-up questions an interviewer might ask

JOB DESCRIPTION:
{job_description}

TECHNICAL SKILLS TO FOCUS ON: {_focus(focus_areas)}"""


def build_case_study_prompt(job_description: str, count: int, difficulty_level: str,
                            company: Optional[str] = None,
                            focus_areas: Optional[List[str]] = None, **_: Any) -> str:
    return f"""Design a case study interview at {difficulty_level} difficulty for this position.

Describe the scenario and the data the candidate receives in the interviewStructure stages,
then list {count} questions the interviewer asks throughout the case. For each question give
the ideal approach (as suggestedAnswer) and the pitfalls to avoid (as tips).
Put a framework for structuring the analysis into preparationTips and common pitfalls into commonMistakes.

JOB DESCRIPTION:
{job_description}

COMPANY / INDUSTRY: {company or 'Not specified'}

FOCUS AREAS: {_focus(focus_areas)}"""


def build_situational_prompt(job_description: str, count: int,
                             focus_areas: Optional[List[str]] = None, **_: Any) -> str:
    return f"""Generate {count} situational interview questions presenting hypothetical scenarios
a candidate could face in this role.

For each question provide:
1. The situational question
2. The skills or qualities being assessed (as the category)
3. What a strong answer demonstrates (as tips)
4. An example of an effective response (as suggestedAnswer)

JOB DESCRIPTION:
{job_description}

FOCUS AREAS: {_focus(focus_areas)}"""


def build_panel_prompt(job_description: str, count: int, difficulty_level: str,
                       focus_areas: Optional[List[str]] = None, **_: Any) -> str:
    return f"""Generate {count} questions for a panel interview at {difficulty_level} difficulty.
Mix behavioral, technical and culture-fit questions as different panelists (hiring manager,
peer engineer, HR partner) would ask them. Use the panelist role as the category.

JOB DESCRIPTION:
{job_description}

FOCUS AREAS: {_focus(focus_areas)}"""


def build_phone_screen_prompt(job_description: str, count: int,
                              focus_areas: Optional[List[str]] = None, **_: Any) -> str:
    return f"""Generate {count} questions a recruiter asks in a 20-30 minute phone screen for this position:
motivation, background walkthrough, compensation expectations, availability and basic
qualification checks. Keep suggested answers short and conversational.

JOB DESCRIPTION:
{job_description}

FOCUS AREAS: {_focus(focus_areas)}"""


QUESTION_PROMPT_BUILDERS = {
    "behavioral": build_behavioral_prompt,
    "technical": build_technical_prompt,
    "case_study": build_case_study_prompt,
    "situational": build_situational_prompt,
    "panel": build_panel_prompt,
    "phone_screen": build_phone_screen_prompt,
}


def build_preparation_tips_prompt(job_description: str, interview_type: str, difficulty_level: str,
                                  job_title: Optional[str] = None, company: Optional[str] = None,
                                  candidate_background: Optional[str] = None) -> str:
    return f"""Provide preparation guidance for an upcoming interview.

Cover: researching the company, key topics from the job description, common mistakes for this
interview type, structuring answers, questions to ask the interviewer, making a strong
impression and following up afterwards.

JOB TITLE: {job_title or 'Not specified'}
COMPANY: {company or 'Not specified'}
INTERVIEW TYPE: {interview_type}
DIFFICULTY: {difficulty_level}

JOB DESCRIPTION:
{job_description}

CANDIDATE BACKGROUND:
{candidate_background or 'Not provided'}"""


def build_mock_interview_prompt(resume_content: str, job_description: str, interview_type: str,
                                count: int, job_title: Optional[str] = None,
                                company: Optional[str] = None) -> str:
    return f"""Run a realistic mock interview for this candidate.

Include, in order:
1. An introduction / ice-breaker question
2. {count} questions about the candidate's own background and experience
3. {count} questions about the job requirements
4. {count} questions about handling challenges relevant to the role
5. Closing questions about career goals and interest in the position

For each question give what the interviewer is assessing (as the category) and what a strong
answer contains (as suggestedAnswer), citing the candidate's actual resume where possible.

RESUME:
{resume_content}

JOB DESCRIPTION:
{job_description}

INTERVIEW TYPE: {interview_type}
POSITION: {job_title or 'Not specified'}
COMPANY: {company or 'Not specified'}"""


def build_interview_prep_prompt(request: Dict[str, Any], resume_content: Optional[str] = None,
                                count: int = DEFAULT_QUESTION_COUNT) -> str:
    """Assemble the full generation prompt for an interview prep request.

    The question section depends on the interview type; when resume content is
    available the questions come from a mock interview built on the resume.
    """
    interview_type = request["interview_type"]
    difficulty = request["difficulty_level"]

    if resume_content:
        questions_part = build_mock_interview_prompt(
            resume_content=resume_content,
            job_description=request["job_description"],
            interview_type=interview_type,
            count=max(1, count // 3),
            job_title=request.get("job_title"),
            company=request.get("company"),
        )
    else:
        builder = QUESTION_PROMPT_BUILDERS[interview_type]
        questions_part = builder(
            job_description=request["job_description"],
            count=count,
            difficulty_level=difficulty,
            company=request.get("company"),
            focus_areas=request.get("focus_areas"),
        )

    tips_part = build_preparation_tips_prompt(
        job_description=request["job_description"],
        interview_type=interview_type,
        difficulty_level=difficulty,
        job_title=request.get("job_title"),
        company=request.get("company"),
        candidate_background=resume_content,
    )

    return f"""{questions_part}

---

{tips_part}

Fill keySkills, preparationTips, commonMistakes and suggestedTopics from the guidance above.
Fill technicalConcepts for technical content and behavioralThemes for behavioral content
(empty arrays when not relevant). Describe the expected interview stages in interviewStructure."""


def build_practice_questions_prompt(interview_type: str, difficulty_level: str, count: int) -> str:
    return f"""Generate {count} general practice questions for a {interview_type.replace('_', ' ')} interview
at {difficulty_level} difficulty. They must work for most professional roles.
Give each a category, a suggested answer and one practical tip."""


def build_company_research_prompt(company_name: str, industry: Optional[str] = None,
                                  job_title: Optional[str] = None) -> str:
    return f"""Provide research about this company for a candidate preparing for an interview.

Include: overview and history, mission and values, products/services and market position,
recent news (last year), culture and work environment, key competitors, leadership team,
and interview questions specific to this company.
If you are not confident about a fact, leave it out rather than guessing.

COMPANY: {company_name}
INDUSTRY: {industry or 'Not specified'}
POSITION APPLIED FOR: {job_title or 'Not specified'}"""


def build_interview_feedback_prompt(interview_type: str, questions_and_answers: List[Dict[str, Any]],
                                    job_title: Optional[str] = None, company: Optional[str] = None,
                                    notes: Optional[str] = None) -> str:
    """Build the feedback prompt from a finished practice session."""
    qa_lines = []
    for item in questions_and_answers:
        answer = item.get("user_answer") or "(no answer given)"
        qa_lines.append(f"[{item['question_id']}] Q: {item['question']}\nA: {answer}")
    qa_text = "\n\n".join(qa_lines) if qa_lines else "(no questions answered)"

    return f"""Give constructive feedback on this practice interview.

Include: overall assessment, strengths demonstrated, areas for improvement, communication
style and clarity, quality of examples, better responses to specific questions (per question id
in questionFeedback) and next steps for future interviews.

INTERVIEW TYPE: {interview_type}
POSITION: {job_title or 'Not specified'}
COMPANY: {company or 'Not specified'}

QUESTIONS AND ANSWERS:
{qa_text}

ADDITIONAL NOTES:
{notes or 'None'}"""
