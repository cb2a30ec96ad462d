from enum import StrEnum


class Timeline(StrEnum):
    IMMEDIATE = "immediate"
    FORECAST = "forecast"


class MaterialType(StrEnum):
    STAINLESS_STEEL = "stainless-steel"
    ALUMINUM = "aluminum"
    CARBON_STEEL = "carbon-steel"
    BRASS = "brass"
    COPPER = "copper"
    OTHER = "other"


STORAGE_KEY_PREFIX = "rfq-uploads/"
MAX_FILE_SIZE = 50 * 1024 * 1024
MAX_FILES_PER_BATCH = 5
PRESIGN_TTL_SECONDS = 15 * 60
GENERIC_BINARY_TYPE = "application/octet-stream"

# Canonical content type per extension; CAD tools often report octet-stream instead.
EXTENSION_CONTENT_TYPES = {
    ".pdf": "application/pdf",
    ".dwg": "application/acad",
    ".dxf": "application/dxf",
    ".step": "application/step",
    ".stp": "application/step",
    ".iges": "application/iges",
    ".igs": "application/iges",
    ".stl": "model/stl",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
}

ALLOWED_CONTENT_TYPES = frozenset(
    {
        "application/pdf",
        "image/vnd.dwg",
        "application/acad",
        "application/x-acad",
        "image/vnd.dxf",
        "application/dxf",
        "application/step",
        "application/x-step",
        "model/iges",
        "application/iges",
        "model/stl",
        "application/sla",
        "image/png",
        "image/jpeg",
        GENERIC_BINARY_TYPE,
    }
)
