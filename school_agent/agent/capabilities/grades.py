"""
Grades capability: recent assignments and academic progress.
"""
from school_agent.agent.capabilities.base import AgentCapability
from school_agent.agent.prompts import GRADES_INSTRUCTIONS


class GradesCapability(AgentCapability):
    name = "grades"
    description = "Recent grades, assignments and academic progress"
    keywords = [
        r"\bgrades?\b", r"\bgpa\b", r"\breport\s*card\b",
        r"\bassignments?\b", r"\bhomework\b", r"\bquiz(zes)?\b",
        r"\btests?\b", r"\bexams?\b", r"\bscores?\b",
        r"\bclass(es)?\b", r"\bacademic(s|ally)?\b",
        r"\bdoing in school\b", r"\bprogress\b",
    ]
    categories = ["profile", "grades"]
    instructions = GRADES_INSTRUCTIONS
