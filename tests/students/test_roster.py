from __future__ import annotations

import pytest

from src.school_ops.school_ops.students.model import Student
from src.school_ops.school_ops.students.roster import class_matches, in_class, roster_ids


@pytest.mark.parametrize(
    "student_class, class_room",
    [
        ("Grade4", "Grade4"),
        ("Grade4", "Grade4/A"),
        ("Grade4/A", "Grade4"),
        ("Grade4_A", "Grade4"),
        (" Grade4 ", "Grade4/A"),
    ],
)
def test_matching_labels(student_class, class_room):
    assert class_matches(student_class, class_room)


@pytest.mark.parametrize(
    "student_class, class_room",
    [
        ("Grade4", "Grade40"),
        ("Grade4/A", "Grade4/B"),
        ("Grade4-A", "Grade4"),
        ("", "Grade4"),
        ("Grade4", ""),
    ],
)
def test_non_matching_labels(student_class, class_room):
    assert not class_matches(student_class, class_room)


def test_class_filter_is_one_directional():
    assert in_class("Grade4/A", "Grade4")
    assert not in_class("Grade4", "Grade4/A")


def test_roster_ids_keep_student_order():
    students = [
        Student("1", "A", "Grade4/A"),
        Student("2", "B", "Grade5"),
        Student("3", "C", "Grade4"),
    ]

    assert roster_ids("Grade4/A", students) == ["1", "3"]
