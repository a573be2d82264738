"""Domain layer — message classification, testing rules, deck model.

This layer depends only on stdlib, pydantic and ruamel.yaml.
It must never import from services, commands, output, or config.
"""
