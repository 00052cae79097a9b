from __future__ import annotations

from typing import Any

from jinja2 import Template


NOT_SPECIFIED = "Not specified"
NO_CV_TEXT = "No CV text available"
MIN_REPORTED_SCORE = 30

SYSTEM_PROMPT = "You are an expert job matching AI. Respond only with valid JSON."

MATCH_PROMPT = Template(
    """
You are an expert job matching AI. Analyze the candidate's CV and match them with suitable jobs.

**Candidate Information:**
Name: {{ candidate.name }}
Email: {{ candidate.email }}
Skills: {{ candidate.skills }}
CV Content: {{ candidate.cv_text }}

**Available Jobs:**
{% for job in jobs %}
Job {{ loop.index }} (ID: {{ job.id }}):
- Title: {{ job.title }}
- Description: {{ job.description }}
- Requirements: {{ job.requirements }}
- Location: {{ job.location }}
- Salary: {{ job.salary }}
{% endfor %}
For each job, provide:
1. A compatibility score from 0-100
2. Brief reasoning (1-2 sentences)

Respond in JSON format:
{
  "matches": [
    {
      "jobId": <job_id>,
      "jobTitle": "<job_title>",
      "score": <0-100>,
      "reasoning": "<brief explanation>"
    }
  ]
}

Only include jobs with a score of {{ min_score }} or higher.
    """.strip()
)


def _or_default(value: Any, default: str) -> str:
    text = str(value).strip() if value is not None else ""
    return text or default


def render_match_prompt(candidate: Any, jobs: list[Any]) -> str:
    context = {
        "candidate": {
            "name": candidate.name,
            "email": candidate.email,
            "skills": _or_default(candidate.skills, NOT_SPECIFIED),
            "cv_text": _or_default(candidate.cv_text, NO_CV_TEXT),
        },
        "jobs": [
            {
                "id": job.id,
                "title": job.title,
                "description": job.description,
                "requirements": job.requirements,
                "location": _or_default(job.location, NOT_SPECIFIED),
                "salary": _or_default(job.salary, NOT_SPECIFIED),
            }
            for job in jobs
        ],
        "min_score": MIN_REPORTED_SCORE,
    }
    return MATCH_PROMPT.render(**context)
