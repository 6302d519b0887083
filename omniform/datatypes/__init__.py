"""Data type definitions — named, hierarchical descriptions of value kinds.

Each data type may specialize a base type and declares free-form traits.
Resolved traits merge a type's own traits over its base's, own values winning.
"""
