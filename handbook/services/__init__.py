from handbook.services.catalog import get_catalog
from handbook.services.ranking import rank_courses, recommend_courses

__all__ = ["get_catalog", "rank_courses", "recommend_courses"]
