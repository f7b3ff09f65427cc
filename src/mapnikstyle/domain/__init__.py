"""Domain layer: neutral style models, the attributed node tree, and errors.

This layer depends only on stdlib and pydantic.
It must never import from translation, services, infrastructure, commands, or config.
"""
