"""Program routes: static program and major lookups."""
from fastapi import APIRouter

from handbook.schemas.course import MajorOutSchema, ProgramOutSchema
from handbook.services.catalog import get_catalog

router = APIRouter(prefix="/programs", tags=["programs"])


@router.get("/{program_code}", response_model=ProgramOutSchema)
def get_program(program_code: str):
    return get_catalog().get_program(program_code)


@router.get("/{program_code}/majors/{major_name}", response_model=MajorOutSchema)
def get_major(program_code: str, major_name: str):
    return get_catalog().get_major(program_code, major_name)
