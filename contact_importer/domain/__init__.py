"""Domain layer for the contact importer.

This layer contains the schema, mapping and validation entities together
with the pure heuristics that score and resolve field mappings. It never
logs and never performs I/O.
"""
