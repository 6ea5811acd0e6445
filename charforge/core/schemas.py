"""
JSON Schemas for build state payloads.

The derivation engine assumes a well-formed BuildState. Payloads that come
in over the web API or from a CLI file are checked here first, and turned
into a BuildState only once they pass.

Both camelCase and snake_case keys are accepted. A payload carries either a
flat 'classes' list or a per-level 'classProgression' log, never both.
"""

import logging
from typing import Any, Dict

import jsonschema

from .config import SUPPORTED_EDITIONS
from .models import BuildState, ABILITIES, ABILITY_NAMES
from .result import Result, ErrorCode

logger = logging.getLogger(__name__)

ABILITY_KEYS = sorted(
    list(ABILITIES) + [code.lower() for code in ABILITIES] + list(ABILITY_NAMES)
)

_STRING_LIST = {"type": "array", "items": {"type": "string"}}

CLASS_LEVEL_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "classId": {"type": "string", "minLength": 1},
        "class_id": {"type": "string", "minLength": 1},
        "level": {
            "type": "integer",
            "description": "Levels in this class; out-of-range values are clamped to 1-20"
        },
        "spellcasting": {
            "type": "string",
            "enum": ["full", "half", "third", "quarter", "pact", "none"]
        },
        "hitDie": {"type": "integer", "enum": [6, 8, 10, 12]},
        "hit_die": {"type": "integer", "enum": [6, 8, 10, 12]},
    },
    "oneOf": [
        {"required": ["classId"]},
        {"required": ["class_id"]},
    ],
    "required": ["level"],
}

LEVEL_PROGRESSION_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "level": {"type": "integer", "minimum": 1},
        "classId": {"type": "string", "minLength": 1},
        "class_id": {"type": "string", "minLength": 1},
        "subclassId": {"type": ["string", "null"]},
        "subclass_id": {"type": ["string", "null"]},
        "featIds": _STRING_LIST,
        "feat_ids": _STRING_LIST,
        "spellIds": _STRING_LIST,
        "spell_ids": _STRING_LIST,
    },
    "oneOf": [
        {"required": ["classId"]},
        {"required": ["class_id"]},
    ],
    "required": ["level"],
}

BUILD_STATE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "abilities": {
            "type": "object",
            "propertyNames": {"enum": ABILITY_KEYS},
            "additionalProperties": {"type": "integer", "minimum": 1, "maximum": 30},
            "description": "Ability scores keyed by code (STR) or name (strength)"
        },
        "classes": {"type": "array", "items": CLASS_LEVEL_SCHEMA},
        "classProgression": {"type": "array", "items": LEVEL_PROGRESSION_SCHEMA},
        "class_progression": {"type": "array", "items": LEVEL_PROGRESSION_SCHEMA},
        "edition": {"type": "string"},
        "backgroundId": {"type": ["string", "null"]},
        "background_id": {"type": ["string", "null"]},
        "selectedSkills": _STRING_LIST,
        "selected_skills": _STRING_LIST,
        "expertiseSkills": _STRING_LIST,
        "expertise_skills": _STRING_LIST,
        "level": {"type": ["integer", "null"]},
    },
    "required": ["abilities"],
    "additionalProperties": False,
    "not": {
        "anyOf": [
            {"required": ["classes", "classProgression"]},
            {"required": ["classes", "class_progression"]},
        ]
    },
}

_validator = jsonschema.Draft7Validator(BUILD_STATE_SCHEMA)


def parse_build_state(data: Any) -> Result:
    """
    Validate a build state payload and convert it to a BuildState.

    Returns:
        Result with the BuildState as data, or a failed Result with
        VALIDATION_ERROR / UNSUPPORTED_EDITION

    Example:
        result = parse_build_state({
            "abilities": {"INT": 16},
            "classes": [{"classId": "Wizard", "level": 5}],
        })
        if result:
            stats = derive_stats(result.data)
    """
    try:
        _validator.validate(data)
    except jsonschema.ValidationError as e:
        location = '/'.join(str(part) for part in e.absolute_path)
        error_msg = f"Build state validation failed: {e.message}"
        if location:
            error_msg += f" (at {location})"
        logger.warning(error_msg)
        return Result.fail(error_msg, ErrorCode.VALIDATION_ERROR)

    edition = data.get('edition')
    if edition is not None and edition not in SUPPORTED_EDITIONS:
        error_msg = f"Unsupported edition: {edition}. Must be one of {', '.join(SUPPORTED_EDITIONS)}"
        logger.warning(error_msg)
        return Result.fail(error_msg, ErrorCode.UNSUPPORTED_EDITION)

    return Result.ok(BuildState.from_dict(data))


__all__ = ['BUILD_STATE_SCHEMA', 'parse_build_state']
