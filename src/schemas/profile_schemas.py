"""Profile response schema."""

from datetime import datetime
from typing import Optional

from src.models.profile import Profile
from src.schemas.base import BaseSchema


class ProfileResponse(BaseSchema):
    """A stored profile as returned by the API."""

    id: Optional[str] = None
    user_id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    institute: Optional[str] = None
    current_degree: Optional[str] = None
    branch: Optional[str] = None
    year_of_study: Optional[str] = None
    technical_skills: Optional[str] = None
    soft_skills: Optional[str] = None
    interests: Optional[str] = None
    hobbies: Optional[str] = None
    template_type: Optional[str] = None
    ai_enhanced_template_text: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_document(cls, profile: Profile) -> "ProfileResponse":
        """Build the response from a stored profile."""
        data = profile.model_dump(exclude={"id"})
        return cls(id=profile.id_str, **{k: v for k, v in data.items() if k in cls.model_fields})
