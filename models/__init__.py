from models.student import Student, Gender, UNASSIGNED_ID
from models.tag import Tag
from models.separation_rule import SeparationRule
from models.app_state import AppState

__all__ = [
    "Student",
    "Gender",
    "UNASSIGNED_ID",
    "Tag",
    "SeparationRule",
    "AppState",
]
