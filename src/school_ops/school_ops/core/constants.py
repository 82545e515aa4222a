"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

PERIODS_PER_DAY = 7

EVALUATION_AXES = ("participation", "homework", "behavior")
EDITABLE_FIELDS = ("attendance", *EVALUATION_AXES, "notes")

# Parent/section separators in class labels, e.g. "Grade4/A" or "Grade4_A".
CLASS_SECTION_SEPARATORS = ("/", "_")

ABSENCE_LOOKBACK_DAYS = 30
CONSECUTIVE_ABSENCE_THRESHOLD = 3
REPEATED_ABSENCE_THRESHOLD = 3
