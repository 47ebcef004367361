#!/usr/bin/env python3
"""
Interview prep service - question generation, practice sessions and feedback.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from core.enums import DifficultyLevel, InterviewType
from core.exporter import resume_plain_text
from core.llm import LLMProvider
from core.llm.schema_models import (
    COMPANY_RESEARCH_SCHEMA,
    INTERVIEW_FEEDBACK_SCHEMA,
    INTERVIEW_PREP_SCHEMA,
    PRACTICE_QUESTIONS_SCHEMA,
)
from core.llm.system_prompts import INTERVIEW_COACH_SYSTEM_PROMPT
from core.prompts.interview import (
    build_company_research_prompt,
    build_interview_feedback_prompt,
    build_interview_prep_prompt,
    build_practice_questions_prompt,
)
from database.models import InterviewFeedback, InterviewPrep, InterviewSession, User
from database.models.base import utcnow
from database.repositories import InterviewPrepRepository, ResumeRepository
from ..dependencies import ensure_owner
from ..exceptions import (
    FeedbackNotFoundException,
    InterviewPrepNotFoundException,
    InterviewSessionNotFoundException,
    ResumeNotFoundException,
    ValidationException,
)
from ..models.requests import (
    EndSessionRequest,
    InterviewPrepRequest,
    InterviewPrepUpdate,
    QuestionAnswerRequest,
    StartSessionRequest,
)
from ..models.responses import (
    InterviewFeedbackResponse,
    InterviewPrepResponse,
    InterviewSessionResponse,
    SessionQuestion,
)
from ..utils import id_str, safe_datetime_iso
from .generation import generate_json

logger = logging.getLogger(__name__)

MAX_PRACTICE_QUESTIONS = 20


def normalize_questions(questions: List[Dict[str, Any]], interview_type: str,
                        difficulty_level: str) -> List[Dict[str, Any]]:
    """Tag generated questions with type/difficulty and guarantee unique ids."""
    seen = set()
    normalized = []
    for question in questions:
        item = dict(question)
        qid = str(item.get('id') or '').strip()
        if not qid or qid in seen:
            qid = uuid.uuid4().hex[:12]
        seen.add(qid)
        item['id'] = qid
        item['type'] = interview_type
        item['difficulty'] = difficulty_level
        item.setdefault('followUpQuestions', [])
        normalized.append(item)
    return normalized


class InterviewPrepService:
    """Service for interview preparation and practice sessions."""

    def __init__(self, db: Session, ai: Optional[LLMProvider] = None):
        self.db = db
        self.ai = ai
        self.repo = InterviewPrepRepository(db)

    def generate(self, user: User, request: InterviewPrepRequest) -> InterviewPrepResponse:
        """
        Generate questions and preparation material for a job.

        When a resume is referenced, the questions are built as a mock
        interview around the candidate's background.
        """
        ensure_owner(user, request.user_id, "generate interview prep for this user")

        resume, resume_text = None, None
        if request.resume_id:
            resume = self._get_owned_resume(user, request.resume_id)
            resume_text = resume_plain_text(resume.title, resume.content)

        prompt_input = request.model_dump(mode='json')
        prompt = build_interview_prep_prompt(prompt_input, resume_content=resume_text)
        data = generate_json(self.ai, prompt, INTERVIEW_PREP_SCHEMA,
                             system_prompt=INTERVIEW_COACH_SYSTEM_PROMPT, what="interview questions")

        company_research = None
        if request.include_company_research and request.company:
            company_research = self._research(request.company, job_title=request.job_title)

        interview_type = request.interview_type.value
        difficulty = request.difficulty_level.value
        prep = self.repo.create(
            user.id,
            resume_id=resume.id if resume else None,
            job_title=request.job_title,
            company=request.company,
            job_description=request.job_description,
            interview_type=interview_type,
            difficulty_level=difficulty,
            focus_areas=list(request.focus_areas),
            questions=normalize_questions(data.get('questions') or [], interview_type, difficulty),
            company_research=company_research,
            key_skills=data.get('keySkills') or [],
            preparation_tips=data.get('preparationTips') or [],
            common_mistakes=data.get('commonMistakes') or [],
            suggested_topics=data.get('suggestedTopics') or [],
            technical_concepts=data.get('technicalConcepts') or [],
            behavioral_themes=data.get('behavioralThemes') or [],
            interview_structure=data.get('interviewStructure') or [],
        )
        self.db.commit()

        logger.info(f"Generated interview prep {prep.id} with {len(prep.questions)} questions")
        return self._to_response(prep)

    def get(self, user: User, prep_id: str) -> InterviewPrepResponse:
        return self._to_response(self._get_owned_prep(user, prep_id))

    def list_for_user(self, user: User, user_id: str) -> List[InterviewPrepResponse]:
        ensure_owner(user, user_id, "view interview preps for this user")
        return [self._to_response(p) for p in self.repo.list_for_user(user.id)]

    def update(self, user: User, prep_id: str, update: InterviewPrepUpdate) -> InterviewPrepResponse:
        prep = self._get_owned_prep(user, prep_id)
        changes = update.model_dump(exclude_unset=True)

        if changes.get('questions') is not None:
            changes['questions'] = normalize_questions(
                changes['questions'], prep.interview_type, prep.difficulty_level
            )
        for field, value in changes.items():
            if value is None and field not in ('job_title', 'company', 'company_research'):
                continue
            setattr(prep, field, value)

        self.db.commit()
        return self._to_response(prep)

    def delete(self, user: User, prep_id: str) -> None:
        prep = self._get_owned_prep(user, prep_id)
        self.repo.delete(prep)
        self.db.commit()
        logger.info(f"Deleted interview prep {prep_id}")

    # --- sessions -------------------------------------------------------

    def start_session(self, user: User, request: StartSessionRequest) -> InterviewSessionResponse:
        ensure_owner(user, request.user_id, "start a session for this user")
        prep = self._get_owned_prep(user, request.prep_id)
        session = self.repo.start_session(user.id, prep.id)
        self.db.commit()
        logger.info(f"Started interview session {session.id} for prep {prep.id}")
        return self._session_response(session)

    def end_session(self, user: User, session_id: str, request: EndSessionRequest) -> InterviewSessionResponse:
        session = self._get_owned_session(user, session_id)
        if session.end_time is not None:
            raise ValidationException("Session has already ended")

        session.end_time = utcnow()
        for field, value in request.model_dump(exclude_none=True).items():
            setattr(session, field, value)
        self.db.commit()
        return self._session_response(session)

    def save_answer(self, user: User, session_id: str, question_id: str,
                    request: QuestionAnswerRequest) -> InterviewSessionResponse:
        session = self._get_owned_session(user, session_id)
        if session.prep.find_question(question_id) is None:
            raise ValidationException(f"Question {question_id} is not part of this interview prep")

        entry = {
            'questionId': question_id,
            'userAnswer': request.user_answer,
            'notes': request.notes,
            'answeredAt': safe_datetime_iso(utcnow()),
        }
        # Reassign so the JSON column change is detected
        session.answers = [a for a in session.answers or [] if a.get('questionId') != question_id] + [entry]
        self.db.commit()
        return self._session_response(session)

    def generate_feedback(self, user: User, session_id: str) -> InterviewFeedbackResponse:
        session = self._get_owned_session(user, session_id)
        prep = session.prep
        if not session.answers:
            raise ValidationException("Answer at least one question before requesting feedback")

        answered = []
        for answer in session.answers:
            question = prep.find_question(answer['questionId']) or {}
            answered.append({
                'question_id': answer['questionId'],
                'question': question.get('question', ''),
                'user_answer': answer.get('userAnswer'),
            })

        prompt = build_interview_feedback_prompt(
            prep.interview_type, answered,
            job_title=prep.job_title, company=prep.company, notes=session.notes,
        )
        data = generate_json(self.ai, prompt, INTERVIEW_FEEDBACK_SCHEMA,
                             system_prompt=INTERVIEW_COACH_SYSTEM_PROMPT, what="interview feedback")

        feedback = self.repo.add_feedback(
            session,
            strengths=data.get('strengths') or [],
            weaknesses=data.get('weaknesses') or [],
            improvement_suggestions=data.get('improvementSuggestions') or [],
            overall_rating=min(10, max(1, int(data.get('overallRating') or 1))),
            specific_feedback=data.get('specificFeedback') or [],
            question_feedback=data.get('questionFeedback') or [],
            next_steps=data.get('nextSteps') or [],
        )
        self.db.commit()
        return self._feedback_response(feedback)

    def get_feedback(self, user: User, session_id: str) -> InterviewFeedbackResponse:
        session = self._get_owned_session(user, session_id)
        feedback = self.repo.latest_feedback(session.id)
        if feedback is None:
            raise FeedbackNotFoundException(f"No feedback for session {session_id}")
        return self._feedback_response(feedback)

    # --- stateless generation -------------------------------------------

    def practice_questions(self, interview_type: InterviewType, difficulty: DifficultyLevel,
                           count: int = 5) -> List[Dict[str, Any]]:
        if not 1 <= count <= MAX_PRACTICE_QUESTIONS:
            raise ValidationException(f"count must be between 1 and {MAX_PRACTICE_QUESTIONS}")

        prompt = build_practice_questions_prompt(interview_type.value, difficulty.value, count)
        data = generate_json(self.ai, prompt, PRACTICE_QUESTIONS_SCHEMA,
                             system_prompt=INTERVIEW_COACH_SYSTEM_PROMPT, what="practice questions")
        questions = normalize_questions(data.get('questions') or [], interview_type.value, difficulty.value)
        return questions[:count]

    def company_research(self, company_name: str, industry: Optional[str] = None,
                         job_title: Optional[str] = None) -> Dict[str, Any]:
        if not company_name.strip():
            raise ValidationException("Company name is required")
        return self._research(company_name.strip(), industry=industry, job_title=job_title)

    def _research(self, company_name: str, industry: Optional[str] = None,
                  job_title: Optional[str] = None) -> Dict[str, Any]:
        prompt = build_company_research_prompt(company_name, industry=industry, job_title=job_title)
        return generate_json(self.ai, prompt, COMPANY_RESEARCH_SCHEMA, what="company research")

    # --- lookups --------------------------------------------------------

    def _get_owned_prep(self, user: User, prep_id: str) -> InterviewPrep:
        try:
            prep = self.repo.get_by_id(prep_id)
        except ValueError:
            prep = None
        if prep is None:
            raise InterviewPrepNotFoundException(f"Interview prep not found: {prep_id}")
        ensure_owner(user, prep.user_id, "access this interview prep")
        return prep

    def _get_owned_session(self, user: User, session_id: str) -> InterviewSession:
        try:
            session = self.repo.get_session(session_id)
        except ValueError:
            session = None
        if session is None:
            raise InterviewSessionNotFoundException(f"Interview session not found: {session_id}")
        ensure_owner(user, session.user_id, "access this session")
        return session

    def _get_owned_resume(self, user: User, resume_id: str):
        try:
            resume = ResumeRepository(self.db).get_by_id(resume_id)
        except ValueError:
            resume = None
        if resume is None:
            raise ResumeNotFoundException(f"Resume not found: {resume_id}")
        ensure_owner(user, resume.user_id, "use this resume")
        return resume

    # --- converters -----------------------------------------------------

    @staticmethod
    def _to_response(prep: InterviewPrep) -> InterviewPrepResponse:
        return InterviewPrepResponse(
            id=str(prep.id),
            user_id=str(prep.user_id),
            job_title=prep.job_title,
            company=prep.company,
            created_at=safe_datetime_iso(prep.created_at),
            updated_at=safe_datetime_iso(prep.updated_at),
            interview_type=prep.interview_type,
            difficulty_level=prep.difficulty_level,
            focus_areas=prep.focus_areas or [],
            questions=prep.questions or [],
            company_research=prep.company_research,
            key_skills=prep.key_skills or [],
            preparation_tips=prep.preparation_tips or [],
            common_mistakes=prep.common_mistakes or [],
            suggested_topics=prep.suggested_topics or [],
            technical_concepts=prep.technical_concepts or [],
            behavioral_themes=prep.behavioral_themes or [],
            interview_structure=prep.interview_structure or [],
        )

    @staticmethod
    def _session_response(session: InterviewSession) -> InterviewSessionResponse:
        prep = session.prep
        questions = []
        for answer in session.answers or []:
            question = prep.find_question(answer.get('questionId')) if prep else None
            questions.append(SessionQuestion(
                question_id=answer.get('questionId'),
                question=(question or {}).get('question'),
                user_answer=answer.get('userAnswer'),
                notes=answer.get('notes'),
                answered_at=answer.get('answeredAt'),
            ))

        return InterviewSessionResponse(
            id=str(session.id),
            user_id=str(session.user_id),
            prep_id=str(session.prep_id),
            start_time=safe_datetime_iso(session.start_time),
            end_time=safe_datetime_iso(session.end_time),
            questions=questions,
            notes=session.notes,
            overall_feedback=session.overall_feedback,
            recording_url=session.recording_url,
        )

    @staticmethod
    def _feedback_response(feedback: InterviewFeedback) -> InterviewFeedbackResponse:
        return InterviewFeedbackResponse(
            id=str(feedback.id),
            user_id=str(feedback.user_id),
            prep_id=str(feedback.prep_id),
            session_id=id_str(feedback.session_id),
            created_at=safe_datetime_iso(feedback.created_at),
            strengths=feedback.strengths or [],
            weaknesses=feedback.weaknesses or [],
            improvement_suggestions=feedback.improvement_suggestions or [],
            overall_rating=feedback.overall_rating,
            specific_feedback=feedback.specific_feedback or [],
            question_feedback=feedback.question_feedback or [],
            next_steps=feedback.next_steps or [],
        )
