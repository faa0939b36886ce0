"""In-memory documents and location helpers for tests."""

from pyqt_refview import Location, TextDocument, TextRange

DOCUMENTS = {
    "src/a.txt": "\n".join(
        [
            "header",
            "",
            "def run(value):",
            "    result = compute(value)  ",
            "    return result",
            "",
            "",
            "print(compute(1))",
        ]
    ),
    "src/b.txt": "compute once\ncompute twice",
}


async def memory_loader(uri: str) -> TextDocument:
    return TextDocument(uri, DOCUMENTS[uri])


async def failing_loader(uri: str) -> TextDocument:
    raise OSError(f"cannot read {uri}")


def match_at(uri: str, line: int, start: int, end: int) -> Location:
    return Location(uri, TextRange.on_line(line, start, end))


def call_location(line: int) -> Location:
    return match_at("src/calls.py", line, 4, 7)
