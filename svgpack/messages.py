"""User-facing messages for errors, success, and progress info."""

from __future__ import annotations


# -----------------------------------------------------------------------------
# Errors
# -----------------------------------------------------------------------------

INVALID_URL = "Please enter a valid URL starting with http:// or https://"
FETCH_FAILED = "Failed to fetch SVG from URL. Please check the URL and try again."
CORS_ERROR = (
    "Unable to fetch from URL due to CORS restrictions. "
    "The server must allow cross-origin requests."
)
PARSE_ERROR = "Failed to parse SVG content. Please ensure it is valid SVG."
MALFORMED_SVG = "Failed to parse SVG content. The SVG may be malformed."
FILE_TOO_LARGE = "File size exceeds 10MB limit"
NO_FILE = "No file provided"
INVALID_FILE_TYPE = "File must be an SVG file"
NO_IMAGES_FOUND = "No embedded images found in the SVG file"
NO_IMAGES_PROVIDED = "No images provided for ZIP generation"
NO_VALID_IMAGES = "No valid images to include in ZIP"
ZIP_GENERATION_FAILED = "ZIP generation failed. Please try downloading images individually."
NETWORK_ERROR = "Network error occurred. Please check your connection and try again."
TIMEOUT_ERROR = "Request timed out. Please try again."
UNEXPECTED_ERROR = "An unexpected error occurred. Please try again."
INVALID_SVG = "Content does not appear to be valid SVG"
EMPTY_CONTENT = "SVG content is empty"
NOT_SVG_RESPONSE = "URL did not return SVG content"


# -----------------------------------------------------------------------------
# Success / info
# -----------------------------------------------------------------------------


def images_extracted(count: int) -> str:
    """Success message for an extraction of ``count`` images."""
    return f"Successfully extracted {count} image{'s' if count != 1 else ''}"


ZIP_READY = "ZIP file is ready for download"
FETCH_SUCCESS = "Successfully loaded SVG from URL"

FETCHING_URL = "Fetching SVG from URL..."
PARSING_SVG = "Parsing SVG content..."
GENERATING_ZIP = "Generating ZIP file..."
READING_FILE = "Reading file..."
