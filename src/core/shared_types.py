"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    FINISHED = "finished"


# --- NOTE the domain layer has its own Player enum (src/checkers/pieces.py).
# --- Names are the same on purpose, the imports show which version is used where.
class Player(StrEnum):
    ONE = "one"
    TWO = "two"
