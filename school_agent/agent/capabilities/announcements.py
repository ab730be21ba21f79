"""
Announcements capability: recent school-wide notices.
"""
from school_agent.agent.capabilities.base import AgentCapability
from school_agent.agent.prompts import ANNOUNCEMENTS_INSTRUCTIONS


class AnnouncementsCapability(AgentCapability):
    name = "announcements"
    description = "Recent school-wide announcements"
    keywords = [
        r"\bannouncements?\b", r"\bannounced\b", r"\bnews\b",
        r"\bnotices?\b", r"\bbulletin\b", r"\bnewsletter\b",
        r"\bwhat'?s new\b",
    ]
    categories = ["announcements"]
    instructions = ANNOUNCEMENTS_INSTRUCTIONS
