"""Media library services: catalog, filters, selection, reordering and pickers."""
from .catalog import MediaCatalog, PreviewPair
from .filter_service import FilterService, visible_media, date_cutoff
from .selection_service import (
    SingleSelection,
    MultiSelection,
    ToggleResult,
    CommitResult,
    SingleCommitResult,
)
from .reorder_service import DragReorder, DragState, move_item
from .picker_service import MediaPicker, MultiMediaPicker, UploadBatchResult
from .upload_service import prepare_upload, prepare_uploads
from .media_library_service import MediaLibraryService

__all__ = [
    "MediaCatalog",
    "PreviewPair",
    "FilterService",
    "visible_media",
    "date_cutoff",
    "SingleSelection",
    "MultiSelection",
    "ToggleResult",
    "CommitResult",
    "SingleCommitResult",
    "DragReorder",
    "DragState",
    "move_item",
    "MediaPicker",
    "MultiMediaPicker",
    "UploadBatchResult",
    "prepare_upload",
    "prepare_uploads",
    "MediaLibraryService",
]
