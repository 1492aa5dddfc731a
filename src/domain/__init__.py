"""Domain layer: entities, enums, protocols and validation rules.

Pure business logic. Nothing in this package imports infrastructure,
application or presentation code.
"""
