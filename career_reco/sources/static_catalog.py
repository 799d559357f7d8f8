"""Built-in course and job catalog.

Used as the last-resort collaborator when every live source fails, and usable
as a regular configured source (type 'static'). The catalog is immutable and
built deterministically so repeated requests see identical items.
"""

import logging
from typing import Any

from career_reco.core.config import CandidateKind, SourceConfig
from career_reco.core.schemas import Query, RawItem
from career_reco.sources.base import SourceConnector

logger = logging.getLogger(__name__)

_UNIVERSITIES = (
    "MIT", "Columbia", "Harvard", "Stanford", "Yale",
    "Princeton", "Berkeley", "Cornell", "Oxford", "Cambridge",
)

# (title, category, skills)
_COURSE_TOPICS: tuple[tuple[str, str, tuple[str, ...]], ...] = (
    ("Mastering Machine Learning Algorithms", "Technology",
     ("Machine Learning", "Python", "Neural Networks", "Data Analysis")),
    ("Advanced Digital Marketing Strategy", "Marketing",
     ("SEO", "Social Media", "Content Marketing", "Analytics")),
    ("Cybersecurity Defense & Offense", "Technology",
     ("Encryption", "Network Security", "Risk Management", "Incident Response")),
    ("Full-Stack Web Development Mastery", "Technology",
     ("HTML", "CSS", "JavaScript", "React", "Node.js")),
    ("Data Science & Business Intelligence", "Technology",
     ("R", "Python", "Statistics", "Data Visualization", "SQL")),
    ("Agile Project Management Professional", "Business",
     ("Agile", "Scrum", "Risk Management", "Scheduling", "Leadership")),
    ("UX/UI Design & User Experience", "Design",
     ("Figma", "Adobe XD", "User Research", "Prototyping", "Accessibility")),
    ("Financial Accounting & Analysis", "Business",
     ("Bookkeeping", "Balance Sheets", "Income Statements", "Budgeting", "Tax")),
    ("Startup Entrepreneurship & Innovation", "Business",
     ("Business Planning", "Pitching", "Market Research", "Funding")),
    ("Excel Power User & Data Analysis", "Business",
     ("Pivot Tables", "Macros", "Data Analysis", "Visualization", "VBA")),
    ("Cloud Architecture & DevOps", "Technology",
     ("AWS", "Azure", "Cloud Architecture", "Deployment", "Docker")),
    ("Mobile App Development & React Native", "Technology",
     ("React Native", "iOS", "Android", "Mobile UI")),
    ("Business Intelligence & Analytics", "Business",
     ("Power BI", "Tableau", "Data Mining", "Predictive Analytics", "KPI")),
    ("Network Security & Ethical Hacking", "Technology",
     ("Penetration Testing", "Vulnerability Assessment", "Forensics")),
    ("Content Creation & Social Media Marketing", "Marketing",
     ("Video Editing", "Content Strategy", "Social Media", "Analytics")),
    ("Human Resources & Talent Management", "Business",
     ("Recruitment", "Employee Relations", "Performance Management", "HR Analytics")),
    ("Game Development & Unity Programming", "Technology",
     ("Unity", "C#", "Game Design", "3D Modeling")),
    ("Artificial Intelligence & Deep Learning", "Technology",
     ("Deep Learning", "TensorFlow", "Computer Vision", "NLP", "AI Ethics")),
    ("Digital Transformation & Change Management", "Business",
     ("Change Management", "Digital Strategy", "Process Improvement", "Leadership")),
    ("Effective Communication", "Soft Skills",
     ("Listening", "Clarity", "Empathy", "Persuasion")),
    ("Leadership Essentials", "Soft Skills",
     ("Decision Making", "Team Management", "Motivation", "Delegation")),
    ("Public Speaking Confidence", "Soft Skills",
     ("Presentation Skills", "Speech Writing", "Audience Engagement", "Storytelling")),
    ("Career Development", "Soft Skills",
     ("Goal Setting", "Networking", "Resume Writing", "Interviewing")),
    ("Time Management Mastery", "Soft Skills",
     ("Prioritization", "Scheduling", "Efficiency", "Goal Setting")),
)

_COURSE_LEVELS = ("Beginner", "Intermediate", "Advanced")

_DESCRIPTION_TEMPLATES = (
    "Gain foundational knowledge in {topic} through interactive sessions, practical "
    "exercises, and real-world projects guided by industry experts.",
    "This introductory course covers the essentials of {topic}, combining theory and "
    "hands-on experience to build confidence and competence.",
    "Designed for those new to {topic}, this course provides comprehensive lessons and "
    "practical applications for immediate skill enhancement.",
    "Explore fundamental concepts of {topic} with structured lectures, collaborative "
    "assignments, and case studies.",
)

# (titles, companies, category, skills)
_JOB_TEMPLATES: tuple[tuple[tuple[str, ...], tuple[str, ...], str, tuple[str, ...]], ...] = (
    (("Frontend Developer", "React Developer", "Web Developer"),
     ("Microsoft", "Google", "Meta"),
     "Software Engineering",
     ("JavaScript", "React", "HTML", "CSS", "TypeScript")),
    (("Backend Developer", "Full Stack Developer", "Software Engineer"),
     ("Uber", "Salesforce", "Oracle"),
     "Software Engineering",
     ("Node.js", "Python", "Java", "PostgreSQL", "AWS")),
    (("Data Analyst", "Business Intelligence Analyst", "Data Scientist"),
     ("Careem", "Noon", "Talabat"),
     "Data & Analytics",
     ("SQL", "Python", "Excel", "Power BI", "Statistics")),
    (("Digital Marketing Specialist", "Content Strategist", "Social Media Manager"),
     ("Anghami", "Emaar", "Aramex"),
     "Marketing",
     ("SEO", "Social Media", "Content Marketing", "Analytics")),
    (("AI Consultant", "Machine Learning Engineer", "NLP Engineer"),
     ("G42", "IBM", "Accenture"),
     "Artificial Intelligence",
     ("Python", "Machine Learning", "TensorFlow", "NLP")),
    (("IT Support Specialist", "Network Administrator", "Security Analyst"),
     ("Etisalat", "Zain", "Ooredoo"),
     "Information Technology",
     ("Networking", "Windows Server", "Network Security", "Troubleshooting")),
)

_JOB_LOCATIONS = ("Remote", "Dubai", "Riyadh", "Doha", "Abu Dhabi", "Ramallah")
_JOB_LEVELS = ("Entry Level", "Mid Level", "Senior Level")


def _build_courses() -> tuple[dict[str, Any], ...]:
    items = []
    for i, (title, category, skills) in enumerate(_COURSE_TOPICS):
        items.append({
            "id": f"course-{i:03d}",
            "kind": "course",
            "title": title,
            "provider": _UNIVERSITIES[i % len(_UNIVERSITIES)],
            "category": category,
            "skills": list(skills),
            "description": _DESCRIPTION_TEMPLATES[i % len(_DESCRIPTION_TEMPLATES)].format(
                topic=title,
            ),
            "level": _COURSE_LEVELS[i % len(_COURSE_LEVELS)],
        })
    return tuple(items)


def _build_jobs() -> tuple[dict[str, Any], ...]:
    items = []
    n = 0
    for t, (titles, companies, category, skills) in enumerate(_JOB_TEMPLATES):
        for title, company in zip(titles, companies):
            items.append({
                "id": f"job-{t}-{n:03d}",
                "kind": "job",
                "title": title,
                "provider": company,
                "category": category,
                "skills": list(skills),
                "description": (
                    f"We are looking for a talented {title} to join our {company} team "
                    f"and work with {', '.join(skills[:3])}."
                ),
                "level": _JOB_LEVELS[n % len(_JOB_LEVELS)],
                "location": _JOB_LOCATIONS[n % len(_JOB_LOCATIONS)],
            })
            n += 1
    return tuple(items)


_CATALOG: dict[str, tuple[dict[str, Any], ...]] = {
    "course": _build_courses(),
    "job": _build_jobs(),
}


def catalog_items(kind: CandidateKind) -> tuple[dict[str, Any], ...]:
    """All built-in items of one kind."""
    return _CATALOG[kind]


def _matches(item: dict[str, Any], terms: list[str]) -> bool:
    text = " ".join([
        item["title"], item["description"], item["category"], " ".join(item["skills"]),
    ]).lower()
    return any(term in text for term in terms)


class StaticCatalogConnector(SourceConnector):
    """SourceConnector over the built-in catalog. Never fails."""

    @property
    def schema_name(self) -> str:
        return "static"

    async def search(self, query: Query, limit: int) -> list[RawItem]:
        items = catalog_items(self.kind)
        terms = [k.term for k in query.keywords]
        matched = [item for item in items if _matches(item, terms)] if terms else []
        if not matched:
            logger.debug("No static %s matched the query, returning the full catalog", self.kind)
            matched = list(items)
        return [self._raw(dict(item)) for item in matched[:limit]]


def fallback_connector(kind: CandidateKind) -> StaticCatalogConnector:
    """The static catalog configured as the fallback collaborator for one kind."""
    return StaticCatalogConnector(
        SourceConfig(name=f"static-{kind}s", type="static", kind=kind),
    )
