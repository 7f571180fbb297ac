"""Screen panels driven by the dispatcher."""

from .base import ModalPanel, Panel
from .commit_modal import CommitModal
from .commit_summary import CommitSummary
from .content_viewer import ContentViewer, RenderMode
from .file_list import FileList
from .filter_input import FilterInput
from .help_modal import HelpModal

__all__ = [
    "CommitModal",
    "CommitSummary",
    "ContentViewer",
    "FileList",
    "FilterInput",
    "HelpModal",
    "ModalPanel",
    "Panel",
    "RenderMode",
]
