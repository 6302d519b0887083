"""Record schemas — ordered, named collections of typed fields.

A field's type is a data type, or another schema for nested composite fields.
"""
