from models.user import Capability, Role, User, ROLE_CAPABILITIES
from models.timeslot import Period
from models.subject import Subject, Term
from models.room import Room
from models.teacher import TeacherRef
from models.school_class import ClassGroup
from models.schedule import ScheduleFilter, ScheduleSlot
from models.timetable import Timetable
from models.change_request import ChangeRequest, ChangeRequestCreate, RequestStatus
from models.page import Page
from models.csv_result import CsvErrorRow, CsvImportResult

__all__ = [
    "Capability",
    "Role",
    "User",
    "ROLE_CAPABILITIES",
    "Period",
    "Subject",
    "Term",
    "Room",
    "TeacherRef",
    "ClassGroup",
    "ScheduleFilter",
    "ScheduleSlot",
    "Timetable",
    "ChangeRequest",
    "ChangeRequestCreate",
    "RequestStatus",
    "Page",
    "CsvErrorRow",
    "CsvImportResult",
]
