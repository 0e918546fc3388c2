"""Utility functions."""

from .id_generator import generate_unique_id, slugify
from .numbers import is_displayable, parse_number, to_number
from .path_utils import get_data_dir, get_document_path, get_project_root
from .settings import get_secret, is_flag_set

__all__ = [
    "generate_unique_id",
    "slugify",
    "is_displayable",
    "parse_number",
    "to_number",
    "get_data_dir",
    "get_document_path",
    "get_project_root",
    "get_secret",
    "is_flag_set",
]
