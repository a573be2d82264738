"""Output layer — renders ServiceResult for humans (Rich) or machines (JSON).

This layer must never import from commands.
"""
