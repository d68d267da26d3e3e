"""WebGameDeck utility modules."""

from .browser import build_launch_arguments, detect_browser_family
from .html_meta import extract_description, extract_og_image, extract_page_metadata
from .identity import derive_identifier, derive_profile_folder_name
from .profiles import resolve_profile_path

__all__ = [
    'build_launch_arguments',
    'detect_browser_family',
    'extract_description',
    'extract_og_image',
    'extract_page_metadata',
    'derive_identifier',
    'derive_profile_folder_name',
    'resolve_profile_path',
]
