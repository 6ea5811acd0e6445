"""
Derive Blueprint - turns build states into derived stats.

Endpoints:
- POST /api/derive       - full DerivedStats for a build state
- POST /api/spell-slots  - single-class slot rows with lock metadata
"""

import asyncio
import logging
from flask import Blueprint, jsonify, request, current_app

from charforge.core.config import SUPPORTED_EDITIONS
from charforge.core.result import Result, ErrorCode
from charforge.core.schemas import parse_build_state
from charforge.engine.caster_types import CasterTypeRefinement
from charforge.engine.derivation import derive_stats, refine_caster_tiers
from charforge.engine.spell_slots import calculate_spell_slots, calculate_spell_slots_async
from charforge.rules.editions import get_rules, is_supported_edition

logger = logging.getLogger(__name__)

derive_bp = Blueprint('derive', __name__, url_prefix='/api')


def _fail(result: Result, status: int = 400):
    return jsonify(result.to_dict()), status


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    return data


TRUTHY = ('1', 'true', 'yes')


def _is_set(value) -> bool:
    """Read a JSON or query-string flag; strings count only when truthy."""
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY
    return isinstance(value, (bool, int)) and bool(value)


def _wants_refinement(data: dict) -> bool:
    return _is_set(data.pop('refine', False)) or _is_set(request.args.get('refine', ''))


@derive_bp.route('/derive', methods=['POST'])
def api_derive():
    """
    Derive stats for a build state.

    Request JSON:
        {
            "abilities": {"STR": 8, "INT": 16, ...},
            "classes": [{"classId": "Wizard", "level": 5}],    # or "classProgression"
            "edition": "2014",                                 # Optional, server default
            "backgroundId": "sage",                            # Optional
            "selectedSkills": ["Arcana", "Insight"],           # Optional
            "expertiseSkills": [],                             # Optional
            "refine": false                                    # Optional, ask the rules service
        }

    Returns:
        {"success": true, "data": {...DerivedStats...}}
    """
    data = _json_body()
    if data is None:
        return _fail(Result.fail('Request body must be a JSON object', ErrorCode.INVALID_INPUT))

    refine = _wants_refinement(data)
    data.setdefault('edition', current_app.config['CHARFORGE'].default_edition)

    result = parse_build_state(data)
    if not result:
        return _fail(result)

    state = result.data
    if refine:
        refinement = CasterTypeRefinement(current_app.caster_classifier)
        state = asyncio.run(refine_caster_tiers(state, refinement))

    stats = derive_stats(state)
    return jsonify(Result.ok(stats.to_dict()).to_dict())


@derive_bp.route('/spell-slots', methods=['POST'])
def api_spell_slots():
    """
    Spell slot rows for one class.

    Request JSON:
        {
            "class": "Wizard",
            "level": 3,
            "edition": "2014",     # Optional
            "refine": false        # Optional, ask the rules service for the caster tier
        }

    Returns:
        {"success": true, "data": {"class": "Wizard", "level": 3, "slots": [{"level": 1, "maximum": 4, "locked": false}, ...]}}
    """
    data = _json_body()
    if data is None:
        return _fail(Result.fail('Request body must be a JSON object', ErrorCode.INVALID_INPUT))

    class_name = data.get('class')
    level = data.get('level')
    if not class_name:
        return _fail(Result.fail('Missing required field: class', ErrorCode.MISSING_REQUIRED_FIELD))
    if not isinstance(level, int) or isinstance(level, bool):
        return _fail(Result.fail('Field level must be an integer', ErrorCode.VALIDATION_ERROR))

    edition = data.get('edition') or current_app.config['CHARFORGE'].default_edition
    if not isinstance(edition, str) or not is_supported_edition(edition):
        return _fail(Result.fail(
            f"Unsupported edition: {edition}. Must be one of {', '.join(SUPPORTED_EDITIONS)}",
            ErrorCode.UNSUPPORTED_EDITION
        ))
    rules = get_rules(edition)

    if _wants_refinement(data):
        slots = asyncio.run(
            calculate_spell_slots_async(level, class_name, current_app.caster_classifier, rules)
        )
    else:
        slots = calculate_spell_slots(level, class_name, rules)

    return jsonify(Result.ok({
        'class': class_name,
        'level': level,
        'edition': rules.edition,
        'slots': [slot.to_dict() for slot in slots],
    }).to_dict())


__all__ = ['derive_bp']
