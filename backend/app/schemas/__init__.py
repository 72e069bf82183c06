"""Wire contracts — camelCase JSON in and out, snake_case attributes inside.

Shape checks only; business validation happens in core/.
"""
