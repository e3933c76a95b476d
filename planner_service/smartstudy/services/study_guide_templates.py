"""
Artifact: planner_service/smartstudy/services/study_guide_templates.py
Purpose: Builds deterministic study guides used whenever model-generated guides are unavailable or invalid.
Author: SmartStudy Team
Created: 2026-10-13
Revised:
- 2026-10-13: Added exam/assignment/revision templates with upcoming, same-day, and past framing. (SmartStudy Team)
Preconditions:
- None; this module performs no I/O.
Inputs:
- Acceptable: Any event type, subject string, and integer day distance (negative means the event has passed).
- Unacceptable: None.
Postconditions:
- Returned guides always satisfy the StudyGuide schema.
Returns:
- `StudyGuide` model instances.
Errors/Exceptions:
- None expected.
"""

from ..schemas.shared import EventType, StudyGuide


def _days_phrase(days: int) -> str:
    return "1 day" if days == 1 else f"{days} days"


def _exam_guide(subject: str, days_until: int) -> StudyGuide:
    if days_until > 0:
        return StudyGuide(
            howToComplete=[
                f"List the {subject} topics the exam covers and mark the ones you feel shaky on",
                f"Work through a timed set of {subject} practice questions",
                "Check every answer and rewrite the ones you missed in your own words",
                f"Finish with a 10-minute recap of key {subject} formulas and definitions",
            ],
            guides=[
                "Spend most of today's time on your weakest topics",
                "Practice under exam timing so the real thing feels familiar",
                "Short breaks every 45 minutes keep your focus sharp",
                "Explaining a concept out loud shows whether you really know it",
            ],
            suggestions=f"Your {subject} exam is in {_days_phrase(days_until)}. Keep today focused and realistic.",
            motivation=[
                f"Every {subject} question you practice now is one less surprise on exam day.",
                "Steady work beats last-minute cramming. You're doing it the right way.",
                f"{_days_phrase(days_until).capitalize()} is enough time to make real progress.",
            ],
        )
    if days_until == 0:
        return StudyGuide(
            howToComplete=[
                f"Skim your {subject} summary notes for 20-30 minutes, no new material",
                "Pack everything you need for the exam the night before or first thing",
                "Read each question carefully and answer the ones you know first",
                "Leave a few minutes at the end to review your answers",
            ],
            guides=[
                "Trust the preparation you've already done",
                "If a question stalls you, move on and come back later",
                "Show your working so partial answers still earn marks",
            ],
            suggestions=f"It's {subject} exam day. Eat well, stay calm, and take it one question at a time.",
            motivation=[
                f"You've put in the {subject} work. Today you just show it.",
                "The exam tests what you know, not who you are.",
                "Breathe, read carefully, and give it your best effort.",
            ],
        )
    return StudyGuide(
        howToComplete=[
            f"Write down which {subject} questions felt easy and which felt hard",
            "Look up the answers to anything you were unsure about",
            "Note the topics to revisit before the next assessment",
        ],
        guides=[
            "Reflect while the exam is still fresh in your mind",
            "Focus on patterns in your mistakes, not individual slips",
            "Keep your notes organised for future revision",
        ],
        suggestions=f"Your {subject} exam is done. A short review now makes the next one easier.",
        motivation=[
            "Finishing an exam is an achievement in itself.",
            f"Every {subject} exam teaches you something for the next one.",
            "Take a proper break. You've earned it.",
        ],
    )


def _assignment_guide(subject: str, days_until: int) -> StudyGuide:
    if days_until > 0:
        return StudyGuide(
            howToComplete=[
                f"Re-read the {subject} assignment brief and list every requirement",
                "Break the work into small pieces and pick the ones for today",
                "Draft the section you've been putting off first",
                "Save your progress and note where to pick up tomorrow",
            ],
            guides=[
                "A rough draft is easier to improve than a blank page",
                "Keep track of your sources as you go",
                "Ask your teacher early if any requirement is unclear",
            ],
            suggestions=f"Your {subject} assignment is due in {_days_phrase(days_until)}. Make steady progress today.",
            motivation=[
                f"Each part you finish brings the {subject} assignment closer to done.",
                "Small daily steps add up to a complete piece of work.",
                "You're ahead of the deadline. Keep the momentum going.",
            ],
        )
    if days_until == 0:
        return StudyGuide(
            howToComplete=[
                f"Check the {subject} assignment against every requirement in the brief",
                "Proofread for errors, missing sections, and formatting",
                "Confirm citations and references are complete",
                "Submit before the deadline and keep a copy of your work",
            ],
            guides=[
                "Final checks catch mistakes that cost easy marks",
                "Save several copies of your work before submitting",
                "Submit early to avoid last-minute technical problems",
            ],
            suggestions=f"Your {subject} assignment is due today. Finish the checks and submit with confidence.",
            motivation=[
                f"You've done the hard part of this {subject} assignment already.",
                "Hitting submit is a real milestone. Enjoy it.",
                "Quality work takes effort, and you've put it in.",
            ],
        )
    return StudyGuide(
        howToComplete=[
            f"Make sure your {subject} assignment was submitted successfully",
            "Note anything you'd do differently next time",
            "File your notes and sources for later revision",
        ],
        guides=[
            "Feedback is most useful when you compare it to your own notes",
            "Keep drafts in case you need to revise",
            "Carry good habits into the next assignment",
        ],
        suggestions=f"Your {subject} assignment deadline has passed. Review how it went and plan the next one.",
        motivation=[
            "Another assignment finished. That's progress.",
            f"Each {subject} assignment builds skills you'll reuse.",
            "Take a moment to recognise the work you did.",
        ],
    )


def _revision_guide(subject: str, days_until: int) -> StudyGuide:
    if days_until > 0:
        return StudyGuide(
            howToComplete=[
                f"Review the {subject} material you've covered so far",
                f"Practice a few {subject} problems on the topics you find hardest",
                "Summarise today's work in five bullet points",
                "Decide what to cover in your next session",
            ],
            guides=[
                "Aim to understand ideas, not just memorise them",
                f"Link new {subject} ideas to what you already know",
                "Regular short sessions beat one long one",
            ],
            suggestions=f"{_days_phrase(days_until).capitalize()} until your {subject} session. Build on what you know.",
            motivation=[
                f"Consistent {subject} practice leads to real results.",
                "Every session makes the next one easier.",
                "You're building knowledge that lasts.",
            ],
        )
    if days_until == 0:
        return StudyGuide(
            howToComplete=[
                f"Pick the three most important {subject} topics for today",
                "Work through examples for each one",
                "Test yourself without looking at your notes",
                "Write down anything that still feels unclear",
            ],
            guides=[
                "Active recall beats re-reading",
                "Keep your phone away while you study",
                "Finish with a quick recap of what you learned",
            ],
            suggestions=f"Today's your {subject} study session. Focus on understanding and practice.",
            motivation=[
                f"A focused {subject} session today pays off later.",
                "You don't need to be perfect, just consistent.",
                "Show up, do the work, and you'll see progress.",
            ],
        )
    return StudyGuide(
        howToComplete=[
            f"Look back at the {subject} topics you've revised",
            "Pick one weak area to revisit this week",
            "Schedule your next study session",
        ],
        guides=[
            "Spaced review keeps knowledge fresh",
            "Mix old and new topics in each session",
            "Track what you've covered to stay motivated",
        ],
        suggestions=f"Keep your {subject} revision going with short, regular reviews.",
        motivation=[
            "Learning is a habit, and you're building it.",
            f"Your {subject} knowledge grows every time you come back to it.",
            "Keep going. Progress compounds.",
        ],
    )


_TEMPLATES = {
    EventType.EXAM: _exam_guide,
    EventType.ASSIGNMENT: _assignment_guide,
    EventType.REVISION: _revision_guide,
}


def build_fallback_study_guide(event_type: EventType, subject: str, days_until: int) -> StudyGuide:
    """Return the template guide for the event type framed as upcoming, same-day, or past."""
    return _TEMPLATES[EventType(event_type)](subject, days_until)
