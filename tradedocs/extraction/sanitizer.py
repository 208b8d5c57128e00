"""Removes Markdown code fences wrapped around model output."""

_JSON_FENCE = "```json"
_FENCE = "```"


def sanitize(raw_text: str) -> str:
    """Strip ```json ... ``` or ``` ... ``` wrapping and surrounding whitespace.

    Fences are peeled until none remain, so sanitizing an already sanitized
    text is a no-op. Never raises; text that is not valid JSON is returned as-is
    for the caller to reject.
    """
    cleaned = raw_text.strip()
    while True:
        if cleaned.startswith(_JSON_FENCE) and cleaned.endswith(_FENCE):
            stripped = cleaned[len(_JSON_FENCE):-len(_FENCE)].strip()
        elif cleaned.startswith(_FENCE) and cleaned.endswith(_FENCE):
            stripped = cleaned[len(_FENCE):-len(_FENCE)].strip()
        else:
            return cleaned
        cleaned = stripped
