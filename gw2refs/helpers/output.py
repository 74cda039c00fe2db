import sys
from pathlib import Path
from typing import Iterable, TextIO


LIGHT_BLUE = "\033[94m"
RESET = "\033[0m"


def format_path_for_console(path: Path, root: Path | None = None) -> str:
    """
    Render a path with the working root stripped (if provided) and
    wrapped in a light-blue ANSI color for console output.
    """
    resolved = path.resolve()
    display = resolved.as_posix()
    if root:
        try:
            rel = resolved.relative_to(root.resolve())
            display = "/" + rel.as_posix()
        except ValueError:
            display = resolved.as_posix()
    return f"{LIGHT_BLUE}{display}{RESET}"


class Progress:
    """Status lines on stderr; stdout is reserved for the markdown sheet."""

    def __init__(self, quiet: bool = False, stream: TextIO | None = None) -> None:
        self.quiet = quiet
        self.stream = stream

    def __call__(self, message: str) -> None:
        if self.quiet:
            return
        print(message, file=self.stream or sys.stderr)


def write_lines(lines: Iterable[str], stream: TextIO) -> int:
    count = 0
    for line in lines:
        stream.write(line + "\n")
        count += 1
    return count


def write_sheet(lines: Iterable[str], path: Path) -> int:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        return write_lines(lines, f)
