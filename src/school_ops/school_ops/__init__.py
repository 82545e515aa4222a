"""School Operations package.

Organized by feature modules (schedules, attendance, sessions, ...). The rule
engines in each module are pure functions over plain records; services wrap them
with persistence and a thin Flask controller layer.
"""
