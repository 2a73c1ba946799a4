"""Constants and configuration values for the data URL converter."""

# Quality (canvas-style 0..1 scale)
DEFAULT_QUALITY = 0.92
MIN_QUALITY = 0.1
MAX_QUALITY = 1.0

# Background used when flattening onto an opaque target
DEFAULT_BACKGROUND = "#ffffff"

# Media types
MIME_OCTET_STREAM = "application/octet-stream"
MIME_PNG = "image/png"
MIME_JPEG = "image/jpeg"
MIME_WEBP = "image/webp"
MIME_GIF = "image/gif"
MIME_BMP = "image/bmp"
MIME_TIFF = "image/tiff"
MIME_AVIF = "image/avif"
MIME_HEIF = "image/heif"
MIME_SVG = "image/svg+xml"

SVG_MIME_TYPES = {MIME_SVG, "image/svg"}

# Target format identifiers mapped to concrete media types.
# "base64" and "original" keep the source type and are resolved separately.
TARGET_FORMAT_MIME = {
    "png": MIME_PNG,
    "jpeg": MIME_JPEG,
    "webp": MIME_WEBP,
    "svg": MIME_SVG,
}

PASSTHROUGH_TARGETS = {"base64", "original"}

# Types a render surface is guaranteed to serialize; everything else is clamped to PNG
CANVAS_MIME_TYPES = {MIME_JPEG, MIME_WEBP}
CANVAS_FALLBACK_MIME = MIME_PNG

# Types that cannot carry an alpha channel
OPAQUE_MIME_TYPES = {MIME_JPEG}

# Types whose encoder honors a quality setting
LOSSY_MIME_TYPES = {MIME_JPEG, MIME_WEBP}

# Pillow save format per canvas media type
PIL_SAVE_FORMATS = {
    MIME_PNG: "PNG",
    MIME_JPEG: "JPEG",
    MIME_WEBP: "WEBP",
}

# libvips buffer savers per canvas media type
VIPS_SAVE_SUFFIXES = {
    MIME_PNG: ".png",
    MIME_JPEG: ".jpg",
    MIME_WEBP: ".webp",
}

MIME_EXTENSIONS = {
    MIME_PNG: "png",
    MIME_JPEG: "jpg",
    MIME_WEBP: "webp",
    MIME_SVG: "svg",
    "image/svg": "svg",
    MIME_GIF: "gif",
    MIME_BMP: "bmp",
}
DEFAULT_EXTENSION = "bin"

# Data URL framing (RFC 2397)
DATA_URL_SCHEME = "data:"
DATA_URL_BASE64_MARKER = ";base64"
DATA_URL_SEPARATOR = ","
BASE64_PAD = "="

# Minimum header length needed for magic-byte sniffing
MAGIC_SNIFF_BYTES = 12
