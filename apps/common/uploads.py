import os
import uuid

from django.conf import settings
from django.core.files.storage import default_storage
from rest_framework import serializers


def validate_receipt_file(value):
    if not value:
        return value
    max_bytes = getattr(settings, "RECEIPT_MAX_MB", 10) * 1024 * 1024
    allowed_exts = getattr(settings, "RECEIPT_ALLOWED_EXTS", ["jpg", "jpeg", "png", "pdf"])
    if hasattr(value, "size") and value.size > max_bytes:
        raise serializers.ValidationError("Receipt file exceeds maximum size")
    name = getattr(value, "name", "") or ""
    ext = os.path.splitext(name)[1].lower().lstrip(".")
    if ext and allowed_exts and ext not in allowed_exts:
        raise serializers.ValidationError("Unsupported receipt file type")
    return value


def save_receipt_upload(upload, folder: str) -> str:
    """Store an uploaded receipt and return its storage name ("" when absent)."""
    if not upload:
        return ""
    ext = os.path.splitext(getattr(upload, "name", "") or "")[1].lower()
    path = f"receipts/{folder}/{uuid.uuid4().hex}{ext}"
    return default_storage.save(path, upload)
