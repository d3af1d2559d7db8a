from board.board import ClassBoard, initial_state, normalize_target
from board.conflicts import detect_conflicts, conflicting_student_ids
from board.errors import (
    BoardError,
    BoardValidationError,
    DuplicateTagError,
    EmptyNameError,
    InvalidClassCountError,
    InvalidGenderError,
    RuleTooSmallError,
)
from board.history import History

__all__ = [
    "ClassBoard",
    "initial_state",
    "normalize_target",
    "detect_conflicts",
    "conflicting_student_ids",
    "BoardError",
    "BoardValidationError",
    "DuplicateTagError",
    "EmptyNameError",
    "InvalidClassCountError",
    "InvalidGenderError",
    "RuleTooSmallError",
    "History",
]
