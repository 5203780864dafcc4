"""Interest evaluation schemas."""

from typing import Dict, List, Optional

from pydantic import Field

from src.schemas.base import BaseSchema


class UserProfileInput(BaseSchema):
    """Profile details the user shared before the chat."""

    name: Optional[str] = None
    email: Optional[str] = None
    institute: Optional[str] = None
    current_degree: Optional[str] = None
    branch: Optional[str] = None
    year_of_study: Optional[str] = None
    technical_skills: Optional[str] = None
    soft_skills: Optional[str] = None
    certifications: Optional[str] = None
    achievements: Optional[str] = None
    hobbies: Optional[str] = None
    interests: Optional[str] = None
    goals: Optional[str] = None

    def to_prompt_data(self) -> Dict[str, str]:
        """Fields that have a value, in declaration order."""
        return {key: value for key, value in self.model_dump().items() if value is not None}


class EvaluationRequest(BaseSchema):
    """Profile and chat answers to evaluate."""

    profile: Optional[UserProfileInput] = Field(None, description="User profile")
    answers: Optional[Dict[str, Optional[str]]] = Field(
        None, description="Answer per question"
    )


class EvaluationResult(BaseSchema):
    """Interest evaluation returned to the client."""

    interests: Optional[Dict[str, float]] = None
    pie_chart_labels: Optional[List[str]] = None
    pie_chart_values: Optional[List[float]] = None
    interest_persona: Optional[str] = None
    strengths: Optional[List[str]] = None
    weaknesses: Optional[List[str]] = None
    dos: Optional[List[str]] = None
    donts: Optional[List[str]] = None
    recommended_roles: Optional[List[str]] = None
    roadmap_90_days: Optional[str] = None
    suggested_courses: Optional[List[str]] = None
    project_ideas: Optional[List[str]] = None
    summary: Optional[str] = None
    invalid_answers: Dict[str, str] = Field(default_factory=dict)
