"""
charforge - rules derivation engine for tabletop character builders.

Turns a character's build state (ability scores, class levels, background,
edition) into derived statistics: proficiency bonus, hit points, spell
slots, pact magic, spellcasting numbers, saving throws and skills.
"""

__version__ = '0.1.0'
