"""Resume router - upload, listing, extraction, export, download and deletion."""

import logging
import time
from pathlib import Path

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import APIRouter, Depends, Header, HTTPException, Response, UploadFile
from fastapi.responses import FileResponse

from app.config import settings
from app.database import RESUMES_COLLECTION, get_db
from app.models.schemas import (
    DeleteResponse,
    ExtractedRecord,
    ExtractRequest,
    ResumeDetail,
    ResumeDocument,
    ResumeListItem,
    ResumeUploadResult,
    UploadBatchResponse,
    UploadError,
)
from app.services.batch import IncomingFile, process_batch
from app.services.exporter import XLSX_MEDIA_TYPE, export_to_excel
from app.services.extractor import extract_resume_data

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/resumes", tags=["resumes"])


def get_owner_id(x_user_id: str = Header("anonymous")) -> str:
    """Identify the owner of stored resumes from the X-User-Id header."""
    return x_user_id


def _parse_object_id(resume_id: str) -> ObjectId:
    """Parse a string into a BSON ObjectId, raising HTTP 400 on invalid format."""
    try:
        return ObjectId(resume_id)
    except InvalidId:
        raise HTTPException(status_code=400, detail="Invalid resume ID format")


async def _find_owned(resume_id: str, user_id: str) -> dict:
    doc = await get_db()[RESUMES_COLLECTION].find_one(
        {"_id": _parse_object_id(resume_id), "user_id": user_id}
    )
    if doc is None:
        raise HTTPException(status_code=404, detail="Resume not found")
    return doc


def _to_list_item(doc: dict) -> ResumeListItem:
    return ResumeListItem(
        id=str(doc["_id"]),
        file_name=doc["file_name"],
        file_type=doc["file_type"],
        uploaded_at=doc["uploaded_at"],
        extracted_data=doc.get("extracted_data") or {},
    )


def _xlsx_response(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/upload", response_model=UploadBatchResponse)
async def upload_resumes(
    files: list[UploadFile],
    user_id: str = Depends(get_owner_id),
) -> UploadBatchResponse:
    """Upload one or more resume files (PDF or DOCX).

    Each file is decoded and run through the extraction engine; the
    extracted record is stored alongside the original file. A file that
    fails is reported in ``errors`` without affecting the others.
    """
    if not files:
        raise HTTPException(status_code=400, detail="Please upload at least one file")
    if len(files) > settings.max_upload_files:
        raise HTTPException(
            status_code=400,
            detail=f"Too many files: at most {settings.max_upload_files} per upload",
        )

    incoming = [
        IncomingFile(
            file_name=file.filename or "unknown",
            content=await file.read(),
            content_type=file.content_type,
        )
        for file in files
    ]
    processed = await process_batch(incoming)

    db = get_db()
    uploads_path = Path(settings.uploads_dir)
    uploads_path.mkdir(parents=True, exist_ok=True)

    results: list[ResumeUploadResult] = []
    errors: list[UploadError] = []

    for item in processed:
        filename = item.file.file_name
        if not item.ok:
            errors.append(UploadError(file_name=filename, error=item.error))
            continue

        try:
            doc = ResumeDocument(
                user_id=user_id,
                file_name=filename,
                file_type=item.file_type,
                file_size=len(item.file.content),
                extracted_data=item.record,
            )
            result = await db[RESUMES_COLLECTION].insert_one(doc.model_dump())
            resume_id = result.inserted_id

            # Save original file to uploads directory
            file_path = uploads_path / f"{resume_id}_{Path(filename).name}"
            file_path.write_bytes(item.file.content)

            await db[RESUMES_COLLECTION].update_one(
                {"_id": resume_id},
                {"$set": {"file_path": str(file_path)}},
            )
        except Exception as exc:
            logger.error("Failed to store file '%s': %s", filename, exc)
            errors.append(UploadError(file_name=filename, error=str(exc)))
            continue

        results.append(
            ResumeUploadResult(
                id=str(resume_id),
                file_name=filename,
                extracted_data=item.record,
            )
        )
        logger.info("Uploaded resume '%s' for user '%s'", filename, user_id)

    return UploadBatchResponse(
        message=f"Processed {len(results)} of {len(files)} files successfully",
        total_files=len(files),
        success_count=len(results),
        error_count=len(errors),
        results=results,
        errors=errors,
    )


@router.post("/extract", response_model=ExtractedRecord)
async def extract_text(body: ExtractRequest) -> ExtractedRecord:
    """Run the extraction engine on plain text without storing anything."""
    return extract_resume_data(body.text)


@router.get("", response_model=list[ResumeListItem])
async def list_resumes(user_id: str = Depends(get_owner_id)) -> list[ResumeListItem]:
    """List the owner's resumes, newest first."""
    cursor = get_db()[RESUMES_COLLECTION].find({"user_id": user_id}).sort("uploaded_at", -1)
    return [_to_list_item(doc) async for doc in cursor]


@router.get("/export/excel")
async def export_all_resumes(user_id: str = Depends(get_owner_id)) -> Response:
    """Export all of the owner's resumes to a single spreadsheet."""
    cursor = get_db()[RESUMES_COLLECTION].find({"user_id": user_id}).sort("uploaded_at", -1)
    docs = [doc async for doc in cursor]
    if not docs:
        raise HTTPException(status_code=404, detail="No resumes found to export")

    content = export_to_excel(docs)
    return _xlsx_response(content, f"resumes_export_{int(time.time() * 1000)}.xlsx")


@router.delete("/all/clear", response_model=DeleteResponse)
async def delete_all_resumes(user_id: str = Depends(get_owner_id)) -> DeleteResponse:
    """Delete every resume belonging to the owner, including stored files."""
    collection = get_db()[RESUMES_COLLECTION]

    async for doc in collection.find({"user_id": user_id}):
        if file_path := doc.get("file_path"):
            Path(file_path).unlink(missing_ok=True)

    result = await collection.delete_many({"user_id": user_id})
    logger.info("Deleted %d resume(s) for user '%s'", result.deleted_count, user_id)
    return DeleteResponse(
        message=f"Successfully deleted {result.deleted_count} resume(s)",
        deleted_count=result.deleted_count,
    )


@router.get("/{resume_id}", response_model=ResumeDetail)
async def get_resume(resume_id: str, user_id: str = Depends(get_owner_id)) -> ResumeDetail:
    """Return one resume's metadata and extracted data."""
    doc = await _find_owned(resume_id, user_id)
    return ResumeDetail(
        **_to_list_item(doc).model_dump(),
        file_size=doc.get("file_size", 0),
    )


@router.get("/{resume_id}/export/excel")
async def export_resume(resume_id: str, user_id: str = Depends(get_owner_id)) -> Response:
    """Export a single resume to a spreadsheet."""
    doc = await _find_owned(resume_id, user_id)
    content = export_to_excel(doc)
    return _xlsx_response(content, f"{doc['file_name']}_export.xlsx")


@router.delete("/{resume_id}", response_model=DeleteResponse)
async def delete_resume(resume_id: str, user_id: str = Depends(get_owner_id)) -> DeleteResponse:
    """Delete a resume and its file on disk."""
    doc = await _find_owned(resume_id, user_id)
    await get_db()[RESUMES_COLLECTION].delete_one({"_id": doc["_id"]})

    file_path = doc.get("file_path")
    if file_path:
        Path(file_path).unlink(missing_ok=True)

    logger.info("Deleted resume %s", resume_id)
    return DeleteResponse(message="Resume deleted successfully", deleted_count=1)


@router.get("/{resume_id}/download")
async def download_resume(resume_id: str, user_id: str = Depends(get_owner_id)) -> FileResponse:
    """Download the original uploaded resume file."""
    doc = await _find_owned(resume_id, user_id)

    file_path = doc.get("file_path")
    if not file_path or not Path(file_path).exists():
        raise HTTPException(status_code=404, detail="Resume file not found on disk")

    return FileResponse(
        path=file_path,
        filename=doc.get("file_name", "resume"),
        media_type=doc.get("file_type", "application/octet-stream"),
    )
