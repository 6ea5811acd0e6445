"""
Rules Blueprint - read-only rule data for the character builder UI.

Endpoints:
- GET /api/editions
- GET /api/rules/<edition>/classes
- GET /api/rules/<edition>/classes/<class_id>
- GET /api/backgrounds
- GET /api/backgrounds/<background_id>
- GET /api/feats?type=&category=&edition=
- GET /api/feats/<feat_id>
- GET /api/spells?level=&school=&class=&q=
- GET /api/spells/schools
- GET /api/spells/<spell_id>
"""

import logging
from flask import Blueprint, jsonify, request

from charforge.core.config import SUPPORTED_EDITIONS
from charforge.core.result import Result, ErrorCode
from charforge.rules.editions import get_rules, is_supported_edition
from charforge.rules.backgrounds import BACKGROUNDS, get_background
from charforge.rules.feats import FEATS, FEAT_TYPES, get_feat, get_asi_feats, get_combat_feats, get_utility_feats
from charforge.rules.spells import SPELL_SCHOOLS, get_spell, filter_spells, get_spell_schools

logger = logging.getLogger(__name__)

rules_bp = Blueprint('rules', __name__, url_prefix='/api')


def _unsupported_edition(edition: str, status: int = 404):
    result = Result.fail(
        f"Unsupported edition: {edition}. Must be one of {', '.join(SUPPORTED_EDITIONS)}",
        ErrorCode.UNSUPPORTED_EDITION
    )
    return jsonify(result.to_dict()), status


@rules_bp.route('/editions')
def api_editions():
    """List supported editions."""
    return jsonify(Result.ok({'editions': list(SUPPORTED_EDITIONS)}).to_dict())


@rules_bp.route('/rules/<edition>/classes')
def api_classes(edition: str):
    """
    All class rules for an edition.

    Returns:
        {"success": true, "data": {"edition": "2014", "classes": {"Wizard": {...}, ...}}}
    """
    if not is_supported_edition(edition):
        return _unsupported_edition(edition)

    rules = get_rules(edition)
    classes = {class_id: rule.to_dict() for class_id, rule in rules.classes.items()}
    return jsonify(Result.ok({'edition': rules.edition, 'classes': classes}).to_dict())


@rules_bp.route('/rules/<edition>/classes/<class_id>')
def api_class(edition: str, class_id: str):
    """Rules for one class in an edition."""
    if not is_supported_edition(edition):
        return _unsupported_edition(edition)

    rule = get_rules(edition).get_class(class_id)
    if rule is None:
        result = Result.fail(f"Unknown class: {class_id}", ErrorCode.UNKNOWN_CLASS)
        return jsonify(result.to_dict()), 404

    return jsonify(Result.ok({'edition': edition, 'class_id': class_id, **rule.to_dict()}).to_dict())


@rules_bp.route('/backgrounds')
def api_backgrounds():
    """All backgrounds."""
    backgrounds = [background.to_dict() for background in BACKGROUNDS.values()]
    return jsonify(Result.ok({'backgrounds': backgrounds}).to_dict())


@rules_bp.route('/backgrounds/<background_id>')
def api_background(background_id: str):
    """One background by id."""
    background = get_background(background_id)
    if background is None:
        result = Result.fail(f"Unknown background: {background_id}", ErrorCode.UNKNOWN_BACKGROUND)
        return jsonify(result.to_dict()), 404
    return jsonify(Result.ok(background.to_dict()).to_dict())


FEAT_CATEGORIES = {
    'asi': get_asi_feats,
    'combat': get_combat_feats,
    'utility': get_utility_feats,
}


def _invalid_filter(message: str):
    return jsonify(Result.fail(message, ErrorCode.VALIDATION_ERROR).to_dict()), 400


@rules_bp.route('/feats')
def api_feats():
    """
    Feats, optionally filtered.

    Query parameters:
        type: 'ability_bonus', 'feat' or 'all'
        category: 'asi', 'combat' or 'utility'
        edition: Only feats offered for this edition
    """
    feat_type = request.args.get('type', 'all')
    category = request.args.get('category')
    edition = request.args.get('edition')

    if feat_type != 'all' and feat_type not in FEAT_TYPES:
        return _invalid_filter(f"Invalid feat type: {feat_type}. Must be one of all, {', '.join(FEAT_TYPES)}")
    if category is not None and category not in FEAT_CATEGORIES:
        return _invalid_filter(f"Invalid feat category: {category}. Must be one of {', '.join(FEAT_CATEGORIES)}")
    if edition is not None and not is_supported_edition(edition):
        return _unsupported_edition(edition, 400)

    feats = FEAT_CATEGORIES[category]() if category else list(FEATS.values())
    if feat_type != 'all':
        feats = [feat for feat in feats if feat.type == feat_type]
    if edition:
        feats = [feat for feat in feats if feat.available_in(edition)]

    return jsonify(Result.ok({'feats': [feat.to_dict() for feat in feats]}).to_dict())


@rules_bp.route('/feats/<feat_id>')
def api_feat(feat_id: str):
    feat = get_feat(feat_id)
    if feat is None:
        result = Result.fail(f"Unknown feat: {feat_id}", ErrorCode.UNKNOWN_FEAT)
        return jsonify(result.to_dict()), 404
    return jsonify(Result.ok(feat.to_dict()).to_dict())


@rules_bp.route('/spells')
def api_spells():
    """
    Spells matching every given filter.

    Query parameters:
        level: 0 (cantrips) to 9
        school: e.g. 'Evocation'
        class: e.g. 'Wizard'
        q: Case-insensitive name search
    """
    level = request.args.get('level')
    school = request.args.get('school')

    if level is not None:
        try:
            level = int(level)
        except ValueError:
            return _invalid_filter(f"Invalid spell level: {level}")
    if school and school not in SPELL_SCHOOLS:
        return _invalid_filter(f"Unknown spell school: {school}")

    spells = filter_spells(
        level=level,
        school=school,
        class_name=request.args.get('class'),
        query=request.args.get('q'),
    )
    return jsonify(Result.ok({'spells': [spell.to_dict() for spell in spells]}).to_dict())


@rules_bp.route('/spells/schools')
def api_spell_schools():
    return jsonify(Result.ok({'schools': get_spell_schools()}).to_dict())


@rules_bp.route('/spells/<spell_id>')
def api_spell(spell_id: str):
    spell = get_spell(spell_id)
    if spell is None:
        result = Result.fail(f"Unknown spell: {spell_id}", ErrorCode.UNKNOWN_SPELL)
        return jsonify(result.to_dict()), 404
    return jsonify(Result.ok(spell.to_dict()).to_dict())


__all__ = ['rules_bp']
