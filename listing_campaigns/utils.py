import re
from datetime import datetime, timezone

ELLIPSIS = "..."


def now_iso() -> str:
    """Return the current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


def truncate_text(text: str, max_length: int) -> str:
    """Cut text to max_length chars, ending with "..." when it was too long.

    Example: truncate_text("abcdefgh", 6) -> "abc..."
    """
    if not text or len(text) <= max_length:
        return text
    return text[: max_length - len(ELLIPSIS)] + ELLIPSIS


def extract_first_int(text: str, default: int) -> int:
    """Return the first run of digits in text, or default if there is none."""
    match = re.search(r"(\d+)", text or "")
    return int(match.group(1)) if match else default


def strip_code_fence(content: str) -> str:
    """Remove a surrounding ```json / ``` markdown fence from LLM output."""
    cleaned = content.strip()
    if cleaned.startswith("```"):
        cleaned = re.sub(r"^```(?:json)?\s*", "", cleaned)
        cleaned = re.sub(r"\s*```$", "", cleaned)
    return cleaned.strip()
