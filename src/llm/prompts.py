"""Prompt templates for interest evaluation."""

from typing import Mapping, Optional

EVALUATION_PROMPT_TEMPLATE = """You are Saathi, an expert AI career counselor. Analyze the user's profile and answers to generate a comprehensive interest evaluation.

{context}

Generate a detailed evaluation in the following JSON format (all fields are required):

{{
  "interests": {{
    "tech": <number 0-100>,
    "design": <number 0-100>,
    "management": <number 0-100>,
    "entrepreneurship": <number 0-100>,
    "research": <number 0-100>
  }},
  "pie_chart_labels": ["Tech", "Design", "Management", "Entrepreneurship", "Research"],
  "pie_chart_values": [<tech_score>, <design_score>, <management_score>, <entrepreneurship_score>, <research_score>],
  "interest_persona": "<A 2-3 sentence description of their primary interest persona>",
  "strengths": ["<strength1>", "<strength2>", "<strength3>"],
  "weaknesses": ["<weakness1>", "<weakness2>"],
  "dos": ["<do1>", "<do2>", "<do3>", "<do4>"],
  "donts": ["<dont1>", "<dont2>", "<dont3>"],
  "recommended_roles": ["<role1>", "<role2>", "<role3>", "<role4>"],
  "roadmap_90_days": "<A detailed 90-day roadmap as a single paragraph>",
  "suggested_courses": ["<course1>", "<course2>", "<course3>", "<course4>"],
  "project_ideas": ["<idea1>", "<idea2>", "<idea3>"],
  "summary": "<A short, crisp 2-sentence summary (max) that highlights their interests, key skills, and hobbies and omits any mention of missing answers>"
}}

IMPORTANT:
- The interest scores should reflect their actual interests based on profile and answers
- All scores should be numbers (not strings)
- pie_chart_values should match the interest scores in the same order
- Be specific and personalized based on their profile
- Return ONLY valid JSON, no markdown, no explanations
- All arrays should have at least 2-4 items
- Recommended roles should be achievable within 1-2 years (entry-level, associate, internship, or junior titles) and tied to their interests/skills
- Suggested courses must name concrete programs or certifications (include the course title and provider when possible)
- The summary should be concise and focused on their interests/skills/hobbies, not on invalid or missing answers"""


def build_evaluation_context(
    profile_data: Mapping[str, str],
    answers: Mapping[str, Optional[str]],
    invalid_answers: Optional[Mapping[str, str]] = None,
) -> str:
    """Render the profile, answers and flagged answers as prompt context."""
    lines = ["User Profile:"]
    for key, value in profile_data.items():
        if value is not None and value.strip():
            lines.append(f"- {key}: {value}")

    lines.append("")
    lines.append("User Answers:")
    for question, answer in answers.items():
        lines.append(f"Q: {question}")
        lines.append(f"A: {answer if answer is not None else ''}")
        lines.append("")

    if invalid_answers:
        lines.append("Invalid or placeholder answers detected for the following questions:")
        for question, answer in invalid_answers.items():
            shown = answer.strip() if answer and answer.strip() else "[no response]"
            lines.append(f"- {question}: {shown}")
        lines.append(
            "Please mention that those entries were incomplete when you summarize "
            "the evaluation and rely mostly on the rest of the answers."
        )
        lines.append("")

    return "\n".join(lines)


def build_evaluation_prompt(
    profile_data: Mapping[str, str],
    answers: Mapping[str, Optional[str]],
    invalid_answers: Optional[Mapping[str, str]] = None,
) -> str:
    """Build the full interest evaluation prompt."""
    context = build_evaluation_context(profile_data, answers, invalid_answers)
    return EVALUATION_PROMPT_TEMPLATE.format(context=context)


__all__ = [
    "EVALUATION_PROMPT_TEMPLATE",
    "build_evaluation_context",
    "build_evaluation_prompt",
]
