"""
Portfolio API Backend: Write Body Helpers
=========================================

What:  Helpers shared by the portfolio and blog create/update routes.
How:   `read_write_body` accepts the same payload as multipart form data,
       a urlencoded form, or a JSON object, keeping only the resource's own
       fields. `store_upload` persists the optional `image` file part and
       returns its URL path; `build_model` turns the collected fields into a
       typed model, reporting pydantic failures as 400 ValidationErrors.

Body handling:
    multipart/form-data    text fields + optional `image` file part
    x-www-form-urlencoded  text fields
    application/json       object with the same field names
    anything else          400, unless the body is empty

    A text `image` value (e.g. the current path re-sent by an edit form) is
    kept as a plain field; an uploaded file replaces it.
"""

import logging
from typing import Any, Dict, Optional, Sequence, Tuple, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from starlette.datastructures import UploadFile
from starlette.requests import Request

from portfolio_api.exceptions import ValidationError, validation_error_from
from portfolio_api.services.upload_service import UploadService

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

IMAGE_FIELD = "image"
JSON_MEDIA_TYPE = "application/json"
FORM_MEDIA_TYPES = {"multipart/form-data", "application/x-www-form-urlencoded"}


def write_body_openapi(fields: Sequence[str]) -> Dict[str, Any]:
    """`openapi_extra` documenting the form and JSON bodies a write route reads."""
    properties = {name: {"type": "string"} for name in fields}
    form_properties = dict(properties, image={"type": "string", "format": "binary"})
    return {
        "requestBody": {
            "content": {
                "multipart/form-data": {"schema": {"type": "object", "properties": form_properties}},
                JSON_MEDIA_TYPE: {"schema": {"type": "object", "properties": properties}},
            }
        }
    }


def media_type_of(request: Request) -> str:
    return request.headers.get("content-type", "").split(";", 1)[0].strip().lower()


async def read_write_body(
    request: Request, fields: Sequence[str]
) -> Tuple[Dict[str, Any], Optional[UploadFile]]:
    """
    Extract the resource fields and the optional image file from a request.

    Returns:
        Tuple of (field values, uploaded image or None). Fields the client
        did not send are absent from the dict.

    Raises:
        ValidationError for malformed JSON, a non-object JSON body, or a
        non-empty body of an unsupported content type.
    """
    media_type = media_type_of(request)

    if media_type == JSON_MEDIA_TYPE or media_type.endswith("+json"):
        try:
            payload = await request.json()
        except ValueError as e:
            raise ValidationError(message=f"Malformed JSON body: {e}")
        if not isinstance(payload, dict):
            raise ValidationError(message="Request body must be a JSON object")
        return {name: payload[name] for name in fields if name in payload}, None

    if media_type in FORM_MEDIA_TYPES:
        form = await request.form()
        values: Dict[str, Any] = {}
        upload: Optional[UploadFile] = None
        for name in fields:
            for value in form.getlist(name):
                if isinstance(value, UploadFile):
                    if name == IMAGE_FIELD:
                        upload = value
                else:
                    values[name] = value
        return values, upload

    if await request.body():
        raise ValidationError(
            message=f"Unsupported content type '{media_type or 'none'}'; "
            "send multipart/form-data, a urlencoded form or JSON",
        )
    return {}, None


async def store_upload(uploads: UploadService, file: Optional[UploadFile]) -> Optional[str]:
    """
    Save the uploaded file, if any, and return its URL path.

    A file part without a filename and without content (what browsers send
    for an untouched file input) counts as no upload.
    """
    if file is None:
        return None
    try:
        content = await file.read()
        if not file.filename and not content:
            return None
        logger.info("Received upload: filename=%s, size=%d bytes", file.filename or "unknown", len(content))
        _, url_path = await uploads.store(file.filename, content)
        return url_path
    finally:
        await file.close()


async def collect_write_fields(
    request: Request, uploads: UploadService, fields: Sequence[str]
) -> Dict[str, Any]:
    """
    Read the body and store any uploaded image.

    The stored file's URL path overrides a text `image` value.
    """
    values, upload = await read_write_body(request, fields)
    image_path = await store_upload(uploads, upload)
    if image_path is not None:
        values[IMAGE_FIELD] = image_path
    return values


def build_model(model_cls: Type[ModelT], **fields) -> ModelT:
    """
    Validate collected fields into `model_cls`.

    Fields passed as None are dropped so the model's defaults apply.
    """
    data = {name: value for name, value in fields.items() if value is not None}
    try:
        return model_cls(**data)
    except PydanticValidationError as e:
        raise validation_error_from(e)
