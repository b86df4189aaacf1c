from supabase import Client
from app.modules.documents.schemas import DocumentResponse, DocumentDownload, MAX_DOCUMENT_BYTES
from app.modules.documents.s3_storage import S3Storage
from app.core.query import first_row
from typing import List, Optional
from fastapi import HTTPException
import logging
import os
import re
import uuid

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME = re.compile(r"[^A-Za-z0-9._-]+")


def safe_filename(filename: str) -> str:
    name = _UNSAFE_FILENAME.sub("_", os.path.basename(filename or "")).strip("._")
    return name or "file"


def document_key(lead_id: str, filename: str) -> str:
    return f"leads/{lead_id}/{uuid.uuid4()}-{safe_filename(filename)}"


class DocumentService:
    def __init__(self, supabase: Client, storage: S3Storage):
        self.supabase = supabase
        self.storage = storage

    def _check_lead(self, lead_id: str):
        result = self.supabase.table("leads")\
            .select("id")\
            .eq("id", lead_id)\
            .limit(1)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=404, detail="Lead not found")

    def upload_document(
        self,
        lead_id: str,
        filename: str,
        content: bytes,
        content_type: Optional[str] = None,
        description: Optional[str] = None,
        salesperson_id: Optional[str] = None
    ) -> DocumentResponse:
        """Store the file in S3 and record it against the lead"""
        if not content:
            raise HTTPException(status_code=400, detail="File is empty")
        if len(content) > MAX_DOCUMENT_BYTES:
            raise HTTPException(status_code=413, detail="File is too large (max 20 MB)")
        self._check_lead(lead_id)

        key = document_key(lead_id, filename)
        file_type = content_type or "application/octet-stream"
        try:
            file_url = self.storage.upload_file(content, key, file_type)
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to upload file: {e}")

        try:
            result = self.supabase.table("documents").insert({
                "lead_id": lead_id,
                "salesperson_id": salesperson_id or None,
                "filename": filename,
                "file_type": file_type,
                "file_size": len(content),
                "file_url": file_url,
                "description": (description or "").strip() or None
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to save document")
        except Exception as e:
            logger.error("Document insert failed for lead %s, removing %s: %s", lead_id, key, e)
            self.storage.delete_file(key)
            if isinstance(e, HTTPException):
                raise
            raise HTTPException(status_code=500, detail=str(e))

        logger.info("Uploaded document %s for lead %s", key, lead_id)
        return DocumentResponse(**result.data[0])

    def get_document(self, document_id: str) -> DocumentResponse:
        try:
            result = self.supabase.table("documents")\
                .select("*")\
                .eq("id", document_id)\
                .maybe_single()\
                .execute()

            row = first_row(result)
            if not row:
                raise HTTPException(status_code=404, detail="Document not found")
            return DocumentResponse(**row)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_documents(self, lead_id: str) -> List[DocumentResponse]:
        """Documents attached to a lead, newest first"""
        try:
            result = self.supabase.table("documents")\
                .select("*")\
                .eq("lead_id", lead_id)\
                .order("created_at", desc=True)\
                .execute()
            return [DocumentResponse(**row) for row in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def download_link(self, document_id: str, expires_in: int = 3600) -> DocumentDownload:
        document = self.get_document(document_id)
        key = S3Storage.key_from_url(document.file_url)
        if not key:
            raise HTTPException(status_code=404, detail="Document file not found")
        try:
            return DocumentDownload(url=self.storage.download_url(key, expires_in), expires_in=expires_in)
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_document(self, document_id: str) -> bool:
        """Delete the record, then the stored object"""
        document = self.get_document(document_id)
        try:
            self.supabase.table("documents")\
                .delete()\
                .eq("id", document_id)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        key = S3Storage.key_from_url(document.file_url)
        if key and not self.storage.delete_file(key):
            logger.warning("Document %s deleted but S3 object %s was not removed", document_id, key)
        return True
