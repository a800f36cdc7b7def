import json
import re
from typing import Any

from zenith.errors import ValidationError

CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


def parse_json_response(content: str) -> dict[str, Any]:
    """
    Parse an LLM reply that should hold a single JSON object.

    Models sometimes wrap the object in a markdown code fence or add prose
    around it; the fence is stripped and, failing a direct parse, the
    outermost {...} span is tried.

    Raises:
        ValidationError: if no JSON object can be recovered
    """
    text = content.strip()
    fenced = CODE_FENCE_RE.match(text)
    if fenced:
        text = fenced.group(1)

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        start, end = text.find("{"), text.rfind("}")
        if start == -1 or end <= start:
            raise ValidationError("LLM response is not valid JSON") from None
        try:
            data = json.loads(text[start : end + 1])
        except json.JSONDecodeError as e:
            raise ValidationError("LLM response is not valid JSON") from e

    if not isinstance(data, dict):
        raise ValidationError("LLM response is not a JSON object")
    return data
