"""Document metadata model."""

from dataclasses import dataclass
from datetime import datetime

from car_reselling.models.enums import DocumentType


@dataclass
class Document:
    """Reference to a file stored outside this package (invoice, receipt, ...)."""

    document_id: str
    vehicle_id: str
    document_type: DocumentType
    original_file_name: str
    content_type: str
    size_bytes: int
    storage_key: str
    uploaded_at: datetime
    uploaded_by: str = "system"
