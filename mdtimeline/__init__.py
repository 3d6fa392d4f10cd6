from .config import DisplayFormat, EstimatorConfig, get_settings, reload_settings
from .domain import HeaderNode, Position, Section, TimelineEntry
from .extraction import extract_sections, has_content
from .estimation import build_timeline, estimate_minutes
from .host import BufferHost, MarkdownBuffer, parse_atx_headers
from .runtime import (
    DeferredQueue,
    DocumentHost,
    ParserUnavailableError,
    RecomputeScheduler,
    Timeline,
    compute_timeline,
)
from .text import classify_line, clean_line, count_words
from .utils.time_format import format_time_range, parse_time_range
