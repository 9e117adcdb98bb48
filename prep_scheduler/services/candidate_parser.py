"""
Turns the output of the upstream meeting analysis into preparation candidates.
"""

import json
import logging
import re
from typing import Any, List

from pydantic import ValidationError

from ..schemas import PreparationCandidateIn

logger = logging.getLogger(__name__)

FENCED_JSON = re.compile(r"```(?:json)?\s*\n?([\s\S]*?)\s*```")


def extract_json_from_response(response: str) -> Any:
    """
    Pull JSON out of a model response: the whole text, then a fenced code
    block, then the outermost [...] or {...} substring.
    """
    try:
        return json.loads(response)
    except (TypeError, json.JSONDecodeError):
        pass

    if not isinstance(response, str):
        raise ValueError("No valid JSON found in response")

    match = FENCED_JSON.search(response)
    if match:
        try:
            return json.loads(match.group(1).strip())
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse fenced JSON: {e}")

    json_start = response.find("[") if "[" in response else response.find("{")
    json_end = response.rfind("]") if "]" in response else response.rfind("}")
    if json_start != -1 and json_end > json_start:
        try:
            return json.loads(response[json_start:json_end + 1])
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse JSON substring: {e}")

    raise ValueError("No valid JSON found in response")


def candidates_from_analysis(payload: Any) -> List[PreparationCandidateIn]:
    """
    Keep the analysed events flagged with `preparation` and turn them into
    candidates. Accepts a list of events or an {"events": [...]} object.
    """
    events = payload.get("events", []) if isinstance(payload, dict) else payload
    if not isinstance(events, list):
        raise ValueError(f"Expected a list of events, got {type(events).__name__}")

    candidates = []
    for event in events:
        if not isinstance(event, dict):
            logger.warning(f"Ignoring analysed event that is not an object: {event!r}")
            continue
        title = event.get("title", "")
        if not event.get("preparation"):
            logger.info(f"Not processing event {title} since not needed.")
            continue
        try:
            candidates.append(PreparationCandidateIn.model_validate(event))
        except ValidationError as e:
            logger.warning(f"Ignoring analysed event {title!r}: {e.error_count()} validation errors")

    logger.info(f"Identified {len(candidates)} events needing preparation")
    return candidates


def parse_analysis(response: str) -> List[PreparationCandidateIn]:
    return candidates_from_analysis(extract_json_from_response(response))
