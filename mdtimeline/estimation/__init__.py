from .reading_time import SectionEstimate, build_timeline, estimate_minutes
