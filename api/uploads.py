"""
api.uploads - Persist an uploaded spreadsheet to UPLOAD_DIR.

The saved file is handed to the import engine, which deletes it.
"""

from __future__ import annotations

import uuid
from pathlib import Path

from flask import current_app, request

from services.errors import BadInput

FILE_FIELDS = ("file", "excelFile")
XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def stage_upload() -> Path:
    """Save the request's spreadsheet and return its temporary path."""
    upload = next(
        (request.files[f] for f in FILE_FIELDS if f in request.files), None
    )
    if upload is None or not upload.filename:
        raise BadInput("Please upload an Excel file")

    # saved under a uuid, so the client name is only checked, never used
    if not (upload.filename.lower().endswith(".xlsx") or upload.mimetype == XLSX_MIMETYPE):
        raise BadInput("Only .xlsx files are supported")

    upload_dir = Path(current_app.config["UPLOAD_DIR"])
    upload_dir.mkdir(parents=True, exist_ok=True)
    path = upload_dir / f"{uuid.uuid4().hex}.xlsx"
    upload.save(path)
    return path
