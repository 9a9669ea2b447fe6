from __future__ import annotations

CAREER_ADVISOR_SYSTEM_PROMPT = (
    "You are a career advisor AI that provides personalized job recommendations "
    "based on user profiles. Always respond with valid JSON."
)

JOB_SUGGESTION_PROMPT = """
Based on the following user profile, suggest 5-8 specific job titles that would be perfect matches. Focus on real job titles that exist in the market.

User Profile:
- Education: {education}
- Specialization: {specialization}
- Skills: {skills}
- Interests: {interests}

For each job suggestion, provide:
1. Job title (be specific)
2. Match percentage (realistic 65-95%)
3. Brief reason why it matches (2-3 sentences)
4. Required skills (3-5 skills)
5. Typical salary range
6. Common locations for this role

Format as JSON array with this structure:
[
  {{
    "job_title": "Senior Frontend Developer",
    "match_percentage": 85,
    "reason": "Your React and JavaScript skills align perfectly with frontend development. The combination of your technical skills and user interface interest makes this an excellent match.",
    "required_skills": ["React", "JavaScript", "CSS", "TypeScript", "HTML"],
    "salary_range": "$70,000 - $120,000",
    "location": "Remote/San Francisco/New York"
  }}
]

Only return the JSON array, no other text.
""".strip()

SUGGESTION_DESCRIPTION_TEMPLATE = (
    "{reason} This role typically requires {skills} and offers competitive "
    "compensation in the {salary_range} range."
)
