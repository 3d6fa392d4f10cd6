"""
Timeline Output Utilities

This module renders a computed reading timeline for the terminal and exports
it to CSV.

Functions:
    - render_outline: Returns the header outline annotated with time ranges.
    - print_timeline: Prints the outline, colorized by header level.
    - save_timeline_to_csv: Saves the timeline to a CSV file.
    - color_txt: Colorizes a string.
"""

import csv
import logging
from pathlib import Path
from typing import List

from colored import attr, fg
from halo import Halo

from mdtimeline.config import get_settings
from mdtimeline.domain import TimelineEntry
from mdtimeline.utils.logger import get_logger
from mdtimeline.utils.time_format import minutes_to_hhmmss, minutes_to_mmss

logger: logging.Logger = get_logger(__name__)

LEVEL_COLORS: dict[int, str] = {
    1: "magenta",
    2: "cyan",
    3: "green",
    4: "yellow",
    5: "blue",
    6: "white",
}
ANNOTATION_COLOR = "light_gray"


def color_txt(string: str, fg_color: str, padding: int = 0) -> str:
    """
    Colorizes a string.

    Arguments:
        string (str): String to be colorized.
        fg_color (str): Foreground color.
        padding (int, optional): Width to left-justify the string to.

    Returns:
        str: Colorized string.
    """
    if padding:
        string = string.ljust(padding)

    return f"{fg(fg_color)}{string}{attr('reset')}"


def render_outline(timeline: List[TimelineEntry], use_color: bool = True) -> List[str]:
    """
    Builds one line per timeline entry: the header followed by its annotation.

    Arguments:
        timeline (List[TimelineEntry]): Entries to render.
        use_color (bool, optional): Whether to emit terminal colors.

    Returns:
        List[str]: Rendered outline lines.
    """
    if not timeline:
        return []

    width: int = max(
        len(f"{'#' * entry.header.level} {entry.header.title}") for entry in timeline
    )
    rendered: List[str] = []
    for entry in timeline:
        heading: str = f"{'#' * entry.header.level} {entry.header.title}"
        if use_color:
            color: str = LEVEL_COLORS.get(entry.header.level, "white")
            rendered.append(
                f"{color_txt(heading, color, width)}  "
                f"{color_txt(entry.display, ANNOTATION_COLOR)}"
            )
        else:
            rendered.append(f"{heading.ljust(width)}  {entry.display}")
    return rendered


def print_timeline(timeline: List[TimelineEntry], use_color: bool = True) -> None:
    """
    Prints the annotated header outline and the total reading time.

    Arguments:
        timeline (List[TimelineEntry]): Entries to print.
        use_color (bool, optional): Whether to emit terminal colors.
    """
    logger.info(msg=f"Printing timeline with {len(timeline)} entries.")
    if not timeline:
        print("No timed sections found.")
        return

    for line in render_outline(timeline, use_color=use_color):
        print(line)

    total: float = timeline[-1].end_minutes
    print(f"Total reading time: {minutes_to_hhmmss(total)}")


def save_timeline_to_csv(timeline: List[TimelineEntry], file_name: str) -> str:
    """
    Saves the timeline to a CSV file.

    Bare file names are placed in the configured timelines folder; paths with
    a directory component are used as given.

    Arguments:
        timeline (List[TimelineEntry]): The timeline data to be saved.
        file_name (str): The name of the file to save the timeline to.

    Returns:
        str: The path to the saved CSV file.
    """
    logger.info(msg="Starting to save timeline to CSV.")
    output_path = Path(file_name)
    if output_path.parent == Path("."):
        output_path = get_settings().timelines_folder / output_path.name
    output_path = output_path.with_suffix(".csv")
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with Halo(
        text=f"Saving timeline to {output_path}",
        spinner="dots",
        text_color="green",
    ):
        with open(output_path, mode="w", newline="", encoding="utf-8") as file:
            writer = csv.writer(file)
            writer.writerow(
                ["Row", "Level", "Title", "Words", "Start", "End", "Duration", "Annotation"]
            )
            logger.debug("Header written to CSV file.")

            for entry in timeline:
                row = [
                    entry.row + 1,
                    entry.header.level,
                    entry.header.title,
                    entry.word_count,
                    minutes_to_hhmmss(entry.start_minutes),
                    minutes_to_hhmmss(entry.end_minutes),
                    minutes_to_mmss(entry.duration_minutes),
                    entry.display,
                ]
                writer.writerow(row)
                logger.debug(msg=f"Written row: {row}")

    logger.info(msg=f"Timeline successfully saved to {output_path}")
    return output_path.as_posix()
