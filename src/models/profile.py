"""Profile document model.

A profile holds the details a user entered for generating a professional
bio, story or cover letter.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from src.models.base import BaseDocument
from src.utils.datetime_utils import utc_now


class Profile(BaseDocument):
    """Stored user profile."""

    collection_name = "profiles"

    user_id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    dob: Optional[str] = None
    linkedin: Optional[str] = None
    institute: Optional[str] = None
    current_degree: Optional[str] = None
    branch: Optional[str] = None
    year_of_study: Optional[str] = None
    certifications: Optional[str] = None
    achievements: Optional[str] = None
    technical_skills: Optional[str] = None
    soft_skills: Optional[str] = None
    hobbies: Optional[str] = None
    interests: Optional[str] = None
    template_type: Optional[str] = Field(
        default=None, description="professional, bio, story or cover"
    )

    has_internship: Optional[bool] = None
    internship_details: Optional[str] = None
    has_experience: Optional[bool] = None
    experience_details: Optional[str] = None
    work_experience: Optional[str] = None
    designation: Optional[str] = None
    years_of_experience: Optional[str] = None
    year_of_joining: Optional[str] = None

    # Cover letter fields
    hiring_manager_name: Optional[str] = None
    company_name: Optional[str] = None
    company_address: Optional[str] = None
    position_title: Optional[str] = None
    relevant_experience: Optional[str] = None
    key_achievement: Optional[str] = None
    strengths: Optional[str] = None
    closing_note: Optional[str] = None

    profile_image: Optional[str] = Field(
        default=None, description="Base64 encoded image or image URL"
    )
    ai_enhanced_template_text: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
