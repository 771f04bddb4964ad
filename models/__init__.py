from models.course import Course
from models.teacher import Teacher
from models.room import Room
from models.timetable_input import TimetableInput, InvalidPayloadError

__all__ = [
    "Course",
    "Teacher",
    "Room",
    "TimetableInput",
    "InvalidPayloadError",
]
