"""Projection subpackage: classification, type tags, formatting and coercion.

Kept free of imports at package level so that ``object_tree.errors`` and the
projection modules can import each other's leaves without cycles.
"""
