"""
Events capability: upcoming events, performances and breaks.

Besides keywords, a mention of one of the students' activities counts as an
events signal ("When is the next Chess Club thing?").
"""
import re
from school_agent.agent.capabilities.base import AgentCapability
from school_agent.agent.prompts import EVENTS_INSTRUCTIONS
from school_agent.agent.state import ContextStore


class EventsCapability(AgentCapability):
    name = "events"
    description = "Upcoming school events, performances, competitions and breaks"
    keywords = [
        r"\bevents?\b", r"\bcalendar\b", r"\bschedule\b",
        r"\bconcerts?\b", r"\bperformances?\b", r"\btournaments?\b",
        r"\bauditions?\b", r"\bconferences?\b", r"\bbreak\b",
        r"\bholidays?\b", r"\bupcoming\b", r"\bcoming up\b",
    ]
    categories = ["profile", "events"]
    instructions = EVENTS_INSTRUCTIONS

    def score(self, context: ContextStore, utterance: str) -> int:
        score = super().score(context, utterance)
        text = utterance.lower()
        activities = {a.lower() for d in context.dependents for a in d.activities}
        for activity in sorted(activities):
            if re.search(rf"\b{re.escape(activity)}\b", text):
                score += 1
        return score
