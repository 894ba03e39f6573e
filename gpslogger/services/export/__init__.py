"""
Export Service

Plain-text export of the log view to timestamped files.
"""

from .writer import ExportRecord, ExportWriter, FileWriter, generate_filename

__all__ = ["ExportRecord", "ExportWriter", "FileWriter", "generate_filename"]
