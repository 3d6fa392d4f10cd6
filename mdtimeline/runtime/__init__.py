from .contracts import DeferCallable, DocumentHost, ParserUnavailableError
from .pipeline import Timeline, compute_timeline
from .scheduler import DeferredQueue, RecomputeScheduler, RecomputeState, asyncio_defer
