"""Export layer — static output generation.

Writes the application's assets and static pages as plain files,
deployable without a running server.
"""

from tabby.export.assets import copy_assets
from tabby.export.static import ExportedFile, ExportResult, StaticExporter, output_filename

__all__ = [
    "ExportResult",
    "ExportedFile",
    "StaticExporter",
    "copy_assets",
    "output_filename",
]
