from .sections import extract_sections, has_content
