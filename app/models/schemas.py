from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class ExtractedRecord(BaseModel):
    """Structured candidate information extracted from resume text.

    Every field has an empty default so a record is always fully populated,
    even when nothing could be extracted.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    skills: tuple[str, ...] = ()
    education: tuple[str, ...] = ()
    experience: tuple[str, ...] = ()


class ResumeDocument(BaseModel):
    """Resume document stored in MongoDB resumes collection."""

    user_id: str
    file_name: str
    file_type: str
    file_size: int = 0
    file_path: str | None = None
    extracted_data: ExtractedRecord = Field(default_factory=ExtractedRecord)
    uploaded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ResumeUploadResult(BaseModel):
    """One successfully processed file from an upload batch."""

    id: str
    file_name: str
    extracted_data: ExtractedRecord


class UploadError(BaseModel):
    """One file from an upload batch that could not be processed."""

    file_name: str
    error: str


class UploadBatchResponse(BaseModel):
    """Response for multi-file upload endpoint."""

    message: str
    total_files: int
    success_count: int
    error_count: int
    results: list[ResumeUploadResult]
    errors: list[UploadError]


class ResumeListItem(BaseModel):
    """Item schema for GET /api/resumes list endpoint."""

    id: str
    file_name: str
    file_type: str
    uploaded_at: datetime
    extracted_data: ExtractedRecord


class ResumeDetail(ResumeListItem):
    """Full resume metadata returned by GET /api/resumes/{id}."""

    file_size: int = 0


class DeleteResponse(BaseModel):
    message: str
    deleted_count: int


class ExtractRequest(BaseModel):
    """Request body for the POST /api/resumes/extract endpoint."""

    text: str = ""
