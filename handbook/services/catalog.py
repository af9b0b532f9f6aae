"""Static course and program reference data.

Stands in for the external handbook data engine. Every lookup is keyed by an
explicit code, so program and major queries are independent of call order.
"""
import json
import logging
from functools import lru_cache
from pathlib import Path

from handbook.core.config import get_settings
from handbook.core.errors import NotFound
from handbook.schemas.course import CourseBasicInfoSchema, MajorOutSchema, ProgramOutSchema

logger = logging.getLogger(__name__)


class Catalog:
    def __init__(self, courses: dict[str, CourseBasicInfoSchema], programs: dict[str, ProgramOutSchema]):
        self._courses = courses
        self._programs = programs

    @classmethod
    def from_file(cls, path: Path) -> "Catalog":
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
        courses = {
            code.upper(): CourseBasicInfoSchema(**info) for code, info in raw.get("courses", {}).items()
        }
        programs = {code: ProgramOutSchema(**info) for code, info in raw.get("programs", {}).items()}
        logger.info("Loaded catalog: %d courses, %d programs from %s", len(courses), len(programs), path)
        return cls(courses, programs)

    def find_course(self, code: str) -> CourseBasicInfoSchema | None:
        return self._courses.get((code or "").strip().upper())

    def get_course(self, code: str) -> CourseBasicInfoSchema:
        course = self.find_course(code)
        if course is None:
            raise NotFound(f"Course {code} not found")
        return course

    def get_program(self, code: str) -> ProgramOutSchema:
        program = self._programs.get((code or "").strip())
        if program is None:
            raise NotFound(f"Program {code} not found")
        return program

    def get_major(self, program_code: str, major_name: str) -> MajorOutSchema:
        program = self.get_program(program_code)
        for major in program.majors:
            if major.name == major_name:
                return major
        raise NotFound(f"Major {major_name} not found in program {program_code}")


@lru_cache
def _load(path: Path) -> Catalog:
    return Catalog.from_file(path)


def get_catalog() -> Catalog:
    return _load(get_settings().catalog_path)
