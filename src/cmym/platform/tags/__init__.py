"""Tag I/O backed by mutagen."""

from .codecs import FlacCodec, Mp3Codec, Mp4Codec, TagCodec, TagCodecError
from .scanner import (
    SUPPORTED_SUFFIXES,
    codec_for,
    iter_audio_files,
    read_tags,
    scan_directory,
    write_store,
    write_tags,
)

__all__ = [
    "FlacCodec",
    "Mp3Codec",
    "Mp4Codec",
    "SUPPORTED_SUFFIXES",
    "TagCodec",
    "TagCodecError",
    "codec_for",
    "iter_audio_files",
    "read_tags",
    "scan_directory",
    "write_store",
    "write_tags",
]
