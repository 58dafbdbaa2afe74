"""File input and output."""

from .file_reader import DatasetReader, frame_to_dataset, from_records
from .exporter import ResultExporter

__all__ = ["DatasetReader", "frame_to_dataset", "from_records", "ResultExporter"]
