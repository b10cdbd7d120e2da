"""Fixed patch lists for the CodeLab database.

Each list is applied in order by a MigrationRunner. Entries are
independent of each other.
"""

from codelab.migrations.models import ColumnChange

# Who may see an assignment: "all" students or only the "selected" ones
ASSIGNMENT_ACCESS_TYPE = (ColumnChange("assignments", "access_type", "TEXT", "all"),)

# Columns used by the teacher dashboard (visibility, proctoring, access control).
# A failing entry does not stop the rest of the list; each column is patched on its own.
TEACHER_COLUMNS = (
    ColumnChange("assignments", "detect_violations", "BOOLEAN", True),
    ColumnChange("assignments", "is_hidden", "BOOLEAN", False),
    ColumnChange("assignments", "is_closed", "BOOLEAN", False),
    ColumnChange("assignments", "allowed_languages", "TEXT", "python,javascript,cpp"),
    ColumnChange("student_assignments", "violations", "INTEGER", 0),
    ColumnChange("student_assignments", "violation_details", "TEXT"),
    ColumnChange("assignments", "access_type", "TEXT", "all"),
    ColumnChange("assignments", "selected_students", "TEXT"),  # comma-separated USNs
)
