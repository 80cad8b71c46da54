from models.timeslot import TimeInterval
from models.section import Section
from models.catalog import Catalog, CourseGroup, group_sections

__all__ = [
    "TimeInterval",
    "Section",
    "Catalog",
    "CourseGroup",
    "group_sections",
]
