"""Document metadata registration.

File bytes are stored elsewhere; this only records where they live and which
vehicle they belong to, so invoices and receipts can be linked.
"""

import logging
import uuid
from datetime import datetime

from car_reselling.exceptions import EntityNotFoundError, InvalidEntityStateError, ValidationError
from car_reselling.models import Document, DocumentType
from car_reselling.services.base import BaseService

logger = logging.getLogger(__name__)

MAX_FILE_SIZE_BYTES = 20 * 1024 * 1024


class DocumentService(BaseService):
    """Register, look up and remove vehicle documents."""

    def register_document(
        self,
        vehicle_id: str,
        document_type: DocumentType,
        original_file_name: str | None,
        content_type: str | None,
        size_bytes: int,
        storage_key: str,
        uploaded_by: str = "system",
    ) -> Document:
        if self.store.get_vehicle(vehicle_id) is None:
            raise EntityNotFoundError(f"Vehicle {vehicle_id} not found")
        if size_bytes < 0:
            raise ValidationError("size_bytes", "cannot be negative.")
        if size_bytes > MAX_FILE_SIZE_BYTES:
            raise ValidationError("size_bytes", "file exceeds maximum size.")

        document = Document(
            document_id=str(uuid.uuid4()),
            vehicle_id=vehicle_id,
            document_type=document_type,
            original_file_name=original_file_name or "document",
            content_type=content_type or "application/octet-stream",
            size_bytes=size_bytes,
            storage_key=storage_key,
            uploaded_at=datetime.now(),
            uploaded_by=uploaded_by,
        )
        self.store.add_document(document)
        return document

    def get_document(self, vehicle_id: str, document_id: str) -> Document:
        document = self.store.get_document(document_id)
        if document is None or document.vehicle_id != vehicle_id:
            raise EntityNotFoundError(f"Document {document_id} not found for vehicle {vehicle_id}")
        return document

    def list_documents(self, vehicle_id: str) -> list[Document]:
        if self.store.get_vehicle(vehicle_id) is None:
            raise EntityNotFoundError(f"Vehicle {vehicle_id} not found")
        return self.store.get_vehicle_documents(vehicle_id)

    def delete_document(self, vehicle_id: str, document_id: str) -> None:
        """Remove a document's metadata.

        Raises
        ------
        EntityNotFoundError
            If the document does not exist or belongs to another vehicle.
        InvalidEntityStateError
            If the vehicle still links it as purchase invoice or payment
            receipt; unlink it with ``VehicleService.update_vehicle`` first.
        """
        document = self.get_document(vehicle_id, document_id)
        vehicle = self.store.get_vehicle(vehicle_id)
        if document_id in (
            vehicle.purchase_invoice_document_id,
            vehicle.purchase_payment_receipt_document_id,
        ):
            raise InvalidEntityStateError(f"Document {document_id} is linked to vehicle {vehicle_id}")

        self.store.delete_document(document.document_id)
        logger.info(
            "Document %s deleted from vehicle %s",
            document_id,
            vehicle_id,
            extra={"extra": {"vehicle_id": vehicle_id, "document_id": document_id}},
        )
