import contextlib
import io
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import mdtimeline.__main__ as mdtimeline_main
import mdtimeline.config as config
from mdtimeline.config import EstimatorConfig
from mdtimeline.host.buffer import BufferHost, MarkdownBuffer
from mdtimeline.runtime.pipeline import Timeline
from mdtimeline.runtime.scheduler import DeferredQueue

SCENARIO_DOCUMENT = (
    "# Title\n"
    "## A\n"
    "one two three four five\n"
    "## B\n"
    "```\n"
    "ignored code\n"
    "```\n"
    "six seven"
)


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch):
    """Keeps environment-driven settings stable across tests."""
    for name in (
        "MDTIMELINE_WORDS_PER_MINUTE",
        "MDTIMELINE_FORMAT",
        "MDTIMELINE_ENABLED",
        "MDTIMELINE_TIMELINES_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    config.reload_settings()
    yield
    config.reload_settings()


@pytest.fixture(autouse=True)
def _silence_halo(monkeypatch):
    """Replace Halo spinners with a no-op context manager for tests."""

    class _DummyHalo:
        def __init__(self, *args, **kwargs):
            self.text = kwargs.get("text")

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            return False

    monkeypatch.setattr("mdtimeline.utils.timeline_utils.Halo", _DummyHalo, raising=False)


@pytest.fixture
def run_cli(monkeypatch):
    """Run the mdtimeline CLI with a custom argv list."""
    monkeypatch.setattr(mdtimeline_main, "load_dotenv", lambda: None)

    def _run_cli(args: Sequence[str]) -> tuple[int, str]:
        monkeypatch.setattr(sys, "argv", ["mdtimeline", *args])
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            try:
                mdtimeline_main.main()
            except SystemExit as exc:
                return exc.code, stdout.getvalue()
        raise AssertionError("CLI did not exit as expected")

    return _run_cli


@pytest.fixture
def make_timeline() -> Callable[..., tuple[Timeline, BufferHost, MarkdownBuffer, DeferredQueue]]:
    """Builds a timeline over an in-memory buffer with a manual tick queue."""

    def _make(
        text: str = SCENARIO_DOCUMENT,
        *,
        config: EstimatorConfig | None = None,
        filetype: str = "markdown",
    ) -> tuple[Timeline, BufferHost, MarkdownBuffer, DeferredQueue]:
        host = BufferHost()
        document = MarkdownBuffer.from_text(text, name="doc.md", filetype=filetype)
        queue = DeferredQueue()
        timeline = Timeline(
            host,
            document,
            config=config or EstimatorConfig(),
            defer=queue.schedule,
        )
        return timeline, host, document, queue

    return _make
