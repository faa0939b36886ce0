"""Presentation settings threaded from the façade into every adapter."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RefViewConfig:
    """Configuration for command wiring, preview text and icons."""

    # Command issued when a node is activated
    show_command: str = "references-view.show"
    match_command_title: str = "Open Reference"
    call_command_title: str = "Open Call"
    history_command_title: str = "Show"

    # Preview text around a match
    preview_before_chars: int = 8
    preview_after_chars: int = 331
    trim_preview: bool = True

    file_icon_id: str = "text-x-generic"

    # Context values, used by hosts to pick menus per node kind
    file_context: str = "file-item"
    match_context: str = "reference-item"
    call_context: str = "call-item"
    history_context: str = "history-item"

    def __post_init__(self) -> None:
        if self.preview_before_chars < 0:
            raise ValueError("preview_before_chars must be >= 0")
        if self.preview_after_chars < 0:
            raise ValueError("preview_after_chars must be >= 0")
        if not self.show_command:
            raise ValueError("show_command must be non-empty")


DEFAULT_CONFIG = RefViewConfig()
