"""
JSON schemas for structured generation.

Every schema is wrapped as {'name', 'strict', 'schema'} and written to be
valid in OpenAI strict mode: all properties required, no additional
properties, optional values expressed as nullable types.
"""
from typing import Any, Dict


def _obj(properties: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": properties,
        "required": list(properties.keys()),
        "additionalProperties": False,
    }


def _wrap(name: str, schema: Dict[str, Any]) -> Dict[str, Any]:
    return {"name": name, "strict": True, "schema": schema}


STR = {"type": "string"}
NULLABLE_STR = {"type": ["string", "null"]}
STR_LIST = {"type": "array", "items": {"type": "string"}}
SCORE = {"type": "integer", "minimum": 0, "maximum": 100}


QUESTION_ITEM = _obj({
    "id": STR,
    "question": STR,
    "category": NULLABLE_STR,
    "suggestedAnswer": NULLABLE_STR,
    "tips": NULLABLE_STR,
    "followUpQuestions": STR_LIST,
})

INTERVIEW_PREP_SCHEMA = _wrap("interview_prep_schema", _obj({
    "questions": {"type": "array", "items": QUESTION_ITEM},
    "keySkills": STR_LIST,
    "preparationTips": STR_LIST,
    "commonMistakes": STR_LIST,
    "suggestedTopics": STR_LIST,
    "technicalConcepts": STR_LIST,
    "behavioralThemes": STR_LIST,
    "interviewStructure": {"type": "array", "items": _obj({
        "stage": STR,
        "description": STR,
        "duration": NULLABLE_STR,
        "tips": NULLABLE_STR,
    })},
}))

PRACTICE_QUESTIONS_SCHEMA = _wrap("practice_questions_schema", _obj({
    "questions": {"type": "array", "items": QUESTION_ITEM},
}))

COMPANY_RESEARCH_SCHEMA = _wrap("company_research_schema", _obj({
    "companyName": STR,
    "overview": NULLABLE_STR,
    "mission": NULLABLE_STR,
    "values": NULLABLE_STR,
    "culture": NULLABLE_STR,
    "products": STR_LIST,
    "competitors": STR_LIST,
    "recentNews": {"type": "array", "items": _obj({
        "title": STR,
        "date": STR,
        "summary": STR,
        "url": NULLABLE_STR,
    })},
    "keyPeople": {"type": "array", "items": _obj({
        "name": STR,
        "title": STR,
        "background": NULLABLE_STR,
    })},
    "interviewQuestions": STR_LIST,
}))

INTERVIEW_FEEDBACK_SCHEMA = _wrap("interview_feedback_schema", _obj({
    "strengths": STR_LIST,
    "weaknesses": STR_LIST,
    "improvementSuggestions": STR_LIST,
    "overallRating": {"type": "integer", "minimum": 1, "maximum": 10},
    "specificFeedback": {"type": "array", "items": _obj({
        "category": STR,
        "feedback": STR,
        "rating": {"type": "integer", "minimum": 1, "maximum": 10},
    })},
    "questionFeedback": {"type": "array", "items": _obj({
        "questionId": STR,
        "feedback": STR,
        "rating": {"type": "integer", "minimum": 1, "maximum": 10},
    })},
    "nextSteps": STR_LIST,
}))

CONTACT_INFO = _obj({
    "name": STR,
    "email": STR,
    "phone": NULLABLE_STR,
    "address": NULLABLE_STR,
    "city": NULLABLE_STR,
    "state": NULLABLE_STR,
    "zip": NULLABLE_STR,
    "country": NULLABLE_STR,
    "linkedin": NULLABLE_STR,
    "github": NULLABLE_STR,
    "website": NULLABLE_STR,
})

WORK_EXPERIENCE_ITEM = _obj({
    "company": STR,
    "title": STR,
    "location": NULLABLE_STR,
    "startDate": STR,
    "endDate": NULLABLE_STR,
    "current": {"type": "boolean"},
    "description": STR,
    "achievements": STR_LIST,
    "skills": STR_LIST,
})

EDUCATION_ITEM = _obj({
    "institution": STR,
    "degree": STR,
    "field": STR,
    "location": NULLABLE_STR,
    "startDate": STR,
    "endDate": NULLABLE_STR,
    "current": {"type": "boolean"},
    "gpa": {"type": ["number", "null"]},
    "achievements": STR_LIST,
})

PROJECT_ITEM = _obj({
    "title": STR,
    "description": STR,
    "url": NULLABLE_STR,
    "startDate": NULLABLE_STR,
    "endDate": NULLABLE_STR,
    "skills": STR_LIST,
    "achievements": STR_LIST,
})

CERTIFICATION_ITEM = _obj({
    "name": STR,
    "issuer": STR,
    "date": STR,
    "expirationDate": NULLABLE_STR,
    "url": NULLABLE_STR,
})

LANGUAGE_ITEM = _obj({
    "language": STR,
    "proficiency": STR,
})

# Resume body shared by generation and parsing
_RESUME_BODY = {
    "contactInfo": CONTACT_INFO,
    "summary": STR,
    "skills": STR_LIST,
    "workExperience": {"type": "array", "items": WORK_EXPERIENCE_ITEM},
    "education": {"type": "array", "items": EDUCATION_ITEM},
    "projects": {"type": "array", "items": PROJECT_ITEM},
    "certifications": {"type": "array", "items": CERTIFICATION_ITEM},
    "languages": {"type": "array", "items": LANGUAGE_ITEM},
}

GENERATED_RESUME_SCHEMA = _wrap("generated_resume_schema", _obj({
    **_RESUME_BODY,
    "keywords": STR_LIST,
}))

PARSED_RESUME_SCHEMA = _wrap("parsed_resume_schema", _obj(_RESUME_BODY))

RESUME_ANALYSIS_SCHEMA = _wrap("resume_analysis_schema", _obj({
    "strengths": STR_LIST,
    "weaknesses": STR_LIST,
    "improvementSuggestions": STR_LIST,
    "skillGaps": STR_LIST,
    "recommendedSkills": STR_LIST,
    "recommendedExperience": STR_LIST,
    "atsCompatibility": SCORE,
    "readabilityScore": SCORE,
    "formattingIssues": STR_LIST,
    "contentIssues": STR_LIST,
    "overallRecommendation": STR,
}))

COVER_LETTER_ANALYSIS_SCHEMA = _wrap("cover_letter_analysis_schema", _obj({
    "strengths": STR_LIST,
    "weaknesses": STR_LIST,
    "suggestions": STR_LIST,
    "tone": STR,
    "readabilityScore": SCORE,
    "formattingIssues": STR_LIST,
    "contentIssues": STR_LIST,
    "overallRecommendation": STR,
}))

KEYWORDS_SCHEMA = _wrap("keywords_schema", _obj({"keywords": STR_LIST}))

SKILLS_SCHEMA = _wrap("skills_schema", _obj({"skills": STR_LIST}))
