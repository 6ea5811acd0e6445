#!/usr/bin/env python3
"""
Command-line interface for charforge.

Provides commands for deriving character stats from a build state file and
for browsing the rule tables from the terminal.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from charforge.core.config import get_config
from charforge.core.logging_config import setup_logging
from charforge.core.schemas import parse_build_state
from charforge.engine.caster_types import CasterTypeClassifier, CasterTypeRefinement, get_caster_type_sync
from charforge.engine.derivation import derive_stats, refine_caster_tiers
from charforge.engine.spell_slots import calculate_spell_slots
from charforge.rules.abilities import format_modifier
from charforge.rules.backgrounds import BACKGROUNDS
from charforge.rules.editions import get_rules, list_classes


def _print_stats(stats):
    print(f"Level {stats.total_level}  "
          f"(proficiency {format_modifier(stats.proficiency_bonus)}, max HP {stats.max_hp})")

    print(f"\n  Classes:")
    for cls in stats.classes:
        print(f"    {cls.class_id:18} {cls.level:2}  d{cls.hit_die}  {cls.spellcasting}")

    if stats.spell_slots:
        slots = ', '.join(f"{level}: {count}" for level, count in enumerate(stats.spell_slots, start=1) if count)
        print(f"\n  Spell slots: {slots}")
    if stats.pact_magic_slots:
        pact = stats.pact_magic_slots
        print(f"  Pact magic:  {pact.slots} slot(s) of level {pact.slot_level}")

    casting = stats.spellcasting
    if casting.is_spellcaster:
        print(f"\n  Spellcasting ({casting.ability}): save DC {casting.save_dc}, "
              f"attack {format_modifier(casting.attack_bonus)}, "
              f"prepared {casting.prepared_count}, cantrips {casting.cantrips_known}")

    print(f"\n  Saving throws: {', '.join(stats.saving_throws) or '-'}")
    print(f"  Skills:        {', '.join(stats.skills) or '-'}")
    if stats.expertise_skills:
        print(f"  Expertise:     {', '.join(stats.expertise_skills)}")


def cmd_derive(args):
    """Derive stats from a build state JSON file."""
    try:
        data = json.loads(Path(args.file).read_text())
    except OSError as e:
        print(f"✗ Error: cannot read {args.file}: {e}", file=sys.stderr)
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(f"✗ Error: {args.file} is not valid JSON: {e}", file=sys.stderr)
        sys.exit(1)

    if isinstance(data, dict):
        data.setdefault('edition', get_config().default_edition)

    result = parse_build_state(data)
    if not result:
        print(f"✗ Error: {result.error}", file=sys.stderr)
        sys.exit(1)

    state = result.data
    if args.refine:
        refinement = CasterTypeRefinement(CasterTypeClassifier.from_config(get_config()))
        state = asyncio.run(refine_caster_tiers(state, refinement))

    stats = derive_stats(state)
    if args.json:
        print(json.dumps(stats.to_dict(), indent=2))
    else:
        _print_stats(stats)


def cmd_classes(args):
    """List classes known to an edition."""
    rules = get_rules(args.edition)
    class_ids = list_classes(rules.edition)

    print(f"{len(class_ids)} classes ({rules.edition} rules):\n")
    for class_id in class_ids:
        rule = rules.get_class(class_id)
        ability = rule.spellcasting_ability or '-'
        print(f"  {class_id:18} d{rule.hit_die:<3} {rule.spellcasting:6} {ability:4} "
              f"saves: {', '.join(rule.saving_throws)}")


def cmd_backgrounds(args):
    """List backgrounds."""
    print(f"{len(BACKGROUNDS)} backgrounds:\n")
    for background in BACKGROUNDS.values():
        print(f"  {background.id:14} {background.name:14} skills: {', '.join(background.granted_skills)}")


def cmd_slots(args):
    """Show spell slot rows for one class at a level."""
    rules = get_rules(args.edition)
    slots = calculate_spell_slots(args.level, args.class_name, rules)

    if not slots:
        print(f"{args.class_name} {args.level}: no spell slots")
        return

    print(f"{args.class_name} {args.level} ({rules.edition} rules):")
    for slot in slots:
        if slot.slot_level is not None:
            print(f"  pact magic: {slot.maximum} slot(s) of level {slot.slot_level}")
        else:
            status = " [locked]" if slot.locked else ""
            print(f"  level {slot.level}: {slot.maximum}{status}")


def cmd_caster_type(args):
    """Show the caster tier of a class."""
    if not args.remote:
        print(f"{args.class_name}: {get_caster_type_sync(args.class_name)}")
        return

    config = get_config()
    if not config.rules_api_enabled:
        print("✗ Error: rules service is disabled (RULES_API_ENABLED=false)", file=sys.stderr)
        sys.exit(1)

    classifier = CasterTypeClassifier.from_config(config)
    caster_type = asyncio.run(classifier.get_caster_type(args.class_name))
    print(f"{args.class_name}: {caster_type}")


def cmd_serve(args):
    """Run the web API."""
    from charforge.web.server import run_server
    run_server(host=args.host, port=args.port, debug=args.debug)


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description='charforge - tabletop character rules derivation'
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Show debug logging')
    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    # ========== derive command ==========
    parser_derive = subparsers.add_parser('derive', help='Derive stats from a build state file')
    parser_derive.add_argument('file', help='Path to build state JSON')
    parser_derive.add_argument('--json', action='store_true', help='Print derived stats as JSON')
    parser_derive.add_argument('--refine', action='store_true',
                               help='Refine caster tiers from the rules service first')
    parser_derive.set_defaults(func=cmd_derive)

    # ========== rule table commands ==========
    parser_classes = subparsers.add_parser('classes', help='List classes')
    parser_classes.add_argument('--edition', default=None, help='Edition (2014 or 2024)')
    parser_classes.set_defaults(func=cmd_classes)

    parser_backgrounds = subparsers.add_parser('backgrounds', help='List backgrounds')
    parser_backgrounds.set_defaults(func=cmd_backgrounds)

    parser_slots = subparsers.add_parser('slots', help='Spell slots for one class')
    parser_slots.add_argument('class_name', help='Class name, e.g. Wizard')
    parser_slots.add_argument('level', type=int, help='Class level')
    parser_slots.add_argument('--edition', default=None, help='Edition (2014 or 2024)')
    parser_slots.set_defaults(func=cmd_slots)

    parser_caster = subparsers.add_parser('caster-type', help='Caster tier of a class')
    parser_caster.add_argument('class_name', help='Class name, e.g. Paladin')
    parser_caster.add_argument('--remote', action='store_true', help='Ask the rules service')
    parser_caster.set_defaults(func=cmd_caster_type)

    # ========== serve command ==========
    parser_serve = subparsers.add_parser('serve', help='Run the web API')
    parser_serve.add_argument('--host', help='Host to bind to')
    parser_serve.add_argument('--port', type=int, help='Port to bind to')
    parser_serve.add_argument('--debug', action='store_true', default=None, help='Enable debug mode')
    parser_serve.set_defaults(func=cmd_serve)

    # Parse and execute
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command != 'serve':
        setup_logging(level='DEBUG' if args.verbose else 'WARNING', use_colors=sys.stdout.isatty())

    args.func(args)


if __name__ == '__main__':
    main()
