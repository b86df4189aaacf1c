from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from app.database.supabase_client import get_supabase
from app.modules.documents.schemas import DocumentResponse, DocumentDownload
from app.modules.documents.service import DocumentService
from app.modules.documents.s3_storage import S3Storage, get_storage
from app.core.dependencies import require_permission
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(tags=["documents"])


def get_document_storage() -> S3Storage:
    try:
        return get_storage()
    except ValueError as e:
        raise HTTPException(status_code=503, detail=str(e))


def get_document_service(
    supabase: Client = Depends(get_supabase),
    storage: S3Storage = Depends(get_document_storage)
) -> DocumentService:
    return DocumentService(supabase, storage)


@router.post("/leads/{lead_id}/documents", response_model=DocumentResponse, status_code=201)
async def upload_document(
    lead_id: str,
    file: UploadFile = File(...),
    description: Optional[str] = Form(None),
    salesperson_id: Optional[str] = Form(None),
    user_data: Dict = Depends(require_permission("documents:create")),
    service: DocumentService = Depends(get_document_service)
):
    """Attach a file to a lead"""
    content = await file.read()
    return service.upload_document(
        lead_id,
        file.filename or "file",
        content,
        content_type=file.content_type,
        description=description,
        salesperson_id=salesperson_id
    )


@router.get("/leads/{lead_id}/documents", response_model=List[DocumentResponse])
async def list_documents(
    lead_id: str,
    user_data: Dict = Depends(require_permission("documents:read")),
    service: DocumentService = Depends(get_document_service)
):
    """Files attached to a lead"""
    return service.list_documents(lead_id)


@router.get("/documents/{document_id}/download", response_model=DocumentDownload)
async def download_document(
    document_id: str,
    user_data: Dict = Depends(require_permission("documents:read")),
    service: DocumentService = Depends(get_document_service)
):
    """Short-lived download link for a document"""
    return service.download_link(document_id)


@router.delete("/documents/{document_id}", status_code=204)
async def delete_document(
    document_id: str,
    user_data: Dict = Depends(require_permission("documents:delete")),
    service: DocumentService = Depends(get_document_service)
):
    """Delete a document and its stored file"""
    service.delete_document(document_id)
    return None
