"""Immutable grading scales and exam definitions."""

from .exams import EXAMS, get_exam
from .grading import SCALES, get_scale

__all__ = ["EXAMS", "SCALES", "get_exam", "get_scale"]
