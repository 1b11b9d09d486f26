"""Prompt builders for the Gemini confidence scorer.

The scorer asks Gemini how well one canned substitute fits the event the
user wants to replace, and expects a single number back.
"""

from __future__ import annotations

from smartcal.models.event import Event
from smartcal.templates import AlternativeTemplate


def build_scoring_system_prompt() -> str:
    """Build the system prompt for the Gemini scoring call.

    Returns:
        The complete system prompt string.
    """
    return """\
You rate how good a substitute activity is for a calendar event the user
can no longer attend. The substitute will occupy the same time slot.

## Scoring Rules

- Reply with a "confidence" between 0 and 1.
- 0.8 or above: the substitute serves the same purpose as the original
  event or is an obvious, low-effort replacement for that time slot.
- 0.6 to 0.8: the substitute is reasonable but changes the purpose
  (for example, a work meeting replaced by personal study).
- Below 0.6: the substitute has little to do with the original event or
  does not fit the time slot.
- Judge only the information given. Do not invent details about the user.
"""


def build_scoring_user_prompt(event: Event, template: AlternativeTemplate) -> str:
    """Build the user prompt describing the event and one substitute.

    Args:
        event: The event being replaced.
        template: The candidate substitute.

    Returns:
        The user prompt string.
    """
    duration = event.end_time - event.start_time
    minutes = int(duration.total_seconds() // 60)
    lines = [
        "Original event:",
        f"- Title: {event.title}",
        f"- Category: {event.category}",
        f"- Starts: {event.start_time.isoformat(timespec='minutes')}",
        f"- Duration: {minutes} minutes",
    ]
    if event.location:
        lines.append(f"- Location: {event.location}")
    if event.description:
        lines.append(f"- Description: {event.description}")
    lines += [
        "",
        "Substitute:",
        f"- Title: {template.title}",
        f"- Category: {template.category}",
        f"- Why it was suggested: {template.reason}",
    ]
    return "\n".join(lines)
