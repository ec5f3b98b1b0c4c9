"""Domain layer — document tree, metadata models, and extraction rules.

This layer depends only on stdlib, pydantic, and the frontmatter parsers.
It must never import from services, infrastructure, commands, or config.
"""
