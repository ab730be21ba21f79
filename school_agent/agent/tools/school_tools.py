"""
School record tools.

Read-only lookups over the example records in school_agent.data. Tools never
raise for unknown ids; they return {"error": ...} so the model can recover.

Student tools only answer for the guardian's own students. The session's
ContextStore arrives through the run config as configurable["context"].
"""
from langchain_core.runnables import RunnableConfig
from school_agent.data import EXAMPLE_ANNOUNCEMENTS, EXAMPLE_EVENTS, EXAMPLE_GRADES
from school_agent.agent.state import ContextStore, Dependent
from school_agent.agent.tools.registry import registry


def _student_not_found(student_id: int) -> dict:
    return {"error": f"Student {student_id} not found", "student_id": student_id}


def _guardian_student(config: RunnableConfig, student_id: int) -> Dependent | None:
    """The student with this id, if they belong to the conversation's guardian."""
    context: ContextStore | None = (config or {}).get("configurable", {}).get("context")
    if context is None:
        return None
    return context.dependent(student_id)


@registry.register(category="profile")
def get_student_profile(student_id: int, config: RunnableConfig) -> dict:
    """Get a student's name, grade level and extracurricular activities.

    Args:
        student_id: The student's numeric id
    """
    student = _guardian_student(config, student_id)
    if student is None:
        return _student_not_found(student_id)
    return {
        "student_id": student.id,
        "name": student.name,
        "grade_level": student.grade_level,
        "activities": list(student.activities),
    }


@registry.register(category="grades")
def get_recent_grades(student_id: int, config: RunnableConfig, subject: str | None = None) -> dict:
    """Get a student's recently graded assignments, newest first.

    Args:
        student_id: The student's numeric id
        subject: Optional subject name to filter by (partial, case-insensitive)
    """
    if _guardian_student(config, student_id) is None:
        return _student_not_found(student_id)

    grades = EXAMPLE_GRADES.get(student_id, [])
    if subject:
        needle = subject.strip().lower()
        grades = [g for g in grades if needle in g["subject"].lower()]

    return {
        "student_id": student_id,
        "grades": sorted(grades, key=lambda g: g["date"], reverse=True),
    }


@registry.register(category="events")
def search_events(query: str = "", activity: str | None = None) -> list[dict]:
    """Search upcoming school events by keyword and/or activity.

    Args:
        query: Words to match against event names and descriptions
        activity: Only return events for this activity (e.g. "Chess Club")
    """
    words = [w for w in query.lower().split() if w]
    results = []
    for event in EXAMPLE_EVENTS:
        if activity and (event["activity"] or "").lower() != activity.strip().lower():
            continue
        haystack = f"{event['name']} {event['description']}".lower()
        if words and not any(word in haystack for word in words):
            continue
        results.append(dict(event))
    return sorted(results, key=lambda e: e["date"])


@registry.register(category="announcements")
def list_announcements(limit: int = 5) -> list[dict]:
    """List the most recent school announcements.

    Args:
        limit: Maximum number of announcements to return
    """
    ordered = sorted(EXAMPLE_ANNOUNCEMENTS, key=lambda a: a["date"], reverse=True)
    return [dict(a) for a in ordered[:max(limit, 0)]]
