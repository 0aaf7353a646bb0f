import enum


class ShiftStatus(str, enum.Enum):
    DRAFTED = "Drafted"
    PENDING = "Pending"
    ASSIGNED = "Assigned"
    CONFIRMED = "Confirmed"
    DECLINED = "Declined"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    MISSED = "Missed"
    CANCELED = "Canceled"
    TIMESHEET_SUBMITTED = "Timesheet Submitted"
    TIMESHEET_APPROVED = "Timesheet Approved"


# status -> Shift attribute stamped when a shift moves into that status.
# Drafted has no timestamp.
STATUS_TIMESTAMP_ATTRS: dict[ShiftStatus, str] = {
    ShiftStatus.PENDING: "published_at",
    ShiftStatus.ASSIGNED: "assigned_at",
    ShiftStatus.CONFIRMED: "confirmed_at",
    ShiftStatus.DECLINED: "declined_at",
    ShiftStatus.IN_PROGRESS: "in_progress_at",
    ShiftStatus.COMPLETED: "completed_at",
    ShiftStatus.MISSED: "missed_at",
    ShiftStatus.CANCELED: "canceled_at",
    ShiftStatus.TIMESHEET_SUBMITTED: "timesheet_submitted_at",
    ShiftStatus.TIMESHEET_APPROVED: "approved_at",
}
