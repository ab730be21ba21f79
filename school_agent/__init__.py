"""
School Agent Backend

Chat front-end for Sparkyville High School guardians:
- Router: Pick a specialist for each question (deterministic keyword rules)
- Capabilities: Grades, events, announcements and general ReAct agents
- Assembler: Reduce streamed fragments or the final message to one answer
- Session: Per-conversation history over an immutable guardian context
"""
