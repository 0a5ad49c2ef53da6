"""Format-specific tag codecs.

Where: src/cmym/platform/tags/codecs.py
What: Read and write the curated field set for MP3, MP4 and FLAC containers.
Why: The review stages only see field maps; container details stay here.
"""

from __future__ import annotations

import abc
from pathlib import Path
from typing import Any, ClassVar, cast, override

from mutagen._util import MutagenError
from mutagen.flac import FLAC, Picture
from mutagen.id3 import (
    APIC,
    ID3,
    TALB,
    TDRC,
    TIT2,
    TPE1,
    TPE2,
    TPOS,
    TRCK,
    TXXX,
    ID3NoHeaderError,
)
from mutagen.mp4 import MP4, MP4Cover, MP4FreeForm

from cmym.platform.logging import logger
from cmym.shared.track_store import (
    COMPILATION_KEY,
    FieldChanges,
    FieldId,
    FieldMap,
    coerce_field_map,
)

from ._values import PNG_MIME, format_number_pair, image_mime, parse_slash_separated

__all__ = [
    "FlacCodec",
    "Mp3Codec",
    "Mp4Codec",
    "TagCodec",
    "TagCodecError",
]

# ID3 picture type for the front cover
FRONT_COVER = 3


class TagCodecError(RuntimeError):
    """Raised when a file's tags cannot be read or written."""

    def __init__(self, path: Path, reason: object) -> None:
        super().__init__(f"{path}: {reason}")
        self.path: Path = path


class TagCodec(abc.ABC):
    """Read and write one container format."""

    SUFFIXES: ClassVar[tuple[str, ...]] = ()

    def read(self, path: Path) -> FieldMap:
        """Return the curated fields stored in ``path``."""
        try:
            raw = self._read(path)
        except (MutagenError, OSError) as exc:
            raise TagCodecError(path, exc) from exc
        return coerce_field_map(raw)

    def write(self, path: Path, fields: FieldMap, changes: FieldChanges | None = None) -> None:
        """Store ``fields`` in ``path``.

        With ``changes`` only the listed fields and custom keys are touched and
        every other frame stays as found. Without it the curated fields are
        replaced wholesale.
        """
        try:
            self._write(path, fields, changes)
        except (MutagenError, OSError) as exc:
            raise TagCodecError(path, exc) from exc
        logger.debug("Wrote %d field(s) to %s", len(fields), path)

    @abc.abstractmethod
    def _read(self, path: Path) -> dict[str, object]:
        raise NotImplementedError

    @abc.abstractmethod
    def _write(self, path: Path, fields: FieldMap, changes: FieldChanges | None) -> None:
        raise NotImplementedError


def _text(fields: FieldMap, field_id: FieldId) -> str | None:
    value = fields.get(field_id)
    return value if isinstance(value, str) else None


def _images(fields: FieldMap) -> list[bytes]:
    value = fields.get(FieldId.COVER_IMAGES)
    return list(cast(list[bytes], value)) if isinstance(value, list) else []


def _custom(fields: FieldMap) -> dict[str, str]:
    value = fields.get(FieldId.CUSTOM_TEXT)
    return dict(cast(dict[str, str], value)) if isinstance(value, dict) else {}


def _touches(changes: FieldChanges | None, field_id: FieldId) -> bool:
    return changes is None or field_id in changes.fields


def _custom_keys(changes: FieldChanges | None, fields: FieldMap) -> set[str]:
    return set(_custom(fields)) if changes is None else set(changes.custom_keys)


class Mp3Codec(TagCodec):
    """ID3v2 tags; works on any file carrying or accepting an ID3 header."""

    SUFFIXES: ClassVar[tuple[str, ...]] = (".mp3",)

    FRAMES: ClassVar[dict[FieldId, type[Any]]] = {
        FieldId.ALBUM_ARTIST: TPE2,
        FieldId.ALBUM: TALB,
        FieldId.DISC: TPOS,
        FieldId.TRACK: TRCK,
        FieldId.ARTIST: TPE1,
        FieldId.TITLE: TIT2,
        FieldId.YEAR: TDRC,
    }

    @staticmethod
    def _load(path: Path) -> ID3:
        try:
            return ID3(path)
        except ID3NoHeaderError:
            return ID3()

    @override
    def _read(self, path: Path) -> dict[str, object]:
        tags = self._load(path)
        raw: dict[str, object] = {}
        for field_id, frame_class in self.FRAMES.items():
            frame = tags.get(frame_class.__name__)
            if frame is not None and frame.text:
                raw[field_id.value] = str(frame.text[0])
        raw[FieldId.COVER_IMAGES.value] = [frame.data for frame in tags.getall("APIC")]
        raw[FieldId.CUSTOM_TEXT.value] = {
            frame.desc: str(frame.text[0]) for frame in tags.getall("TXXX") if frame.text
        }
        return raw

    @override
    def _write(self, path: Path, fields: FieldMap, changes: FieldChanges | None) -> None:
        tags = self._load(path)
        for field_id, frame_class in self.FRAMES.items():
            if not _touches(changes, field_id):
                continue
            tags.delall(frame_class.__name__)
            value = _text(fields, field_id)
            if value:
                tags.add(frame_class(encoding=3, text=[value]))

        if _touches(changes, FieldId.COVER_IMAGES):
            types = {frame.data: frame.type for frame in tags.getall("APIC")}
            tags.delall("APIC")
            for index, image in enumerate(_images(fields)):
                tags.add(
                    APIC(
                        encoding=3,
                        mime=image_mime(image),
                        type=types.get(image, FRONT_COVER if index == 0 else 0),
                        desc=str(index),
                        data=image,
                    )
                )

        custom = _custom(fields)
        if changes is None:
            tags.delall("TXXX")
        for desc in _custom_keys(changes, fields):
            tags.delall(f"TXXX:{desc}")
            if desc in custom:
                tags.add(TXXX(encoding=3, desc=desc, text=[custom[desc]]))
        tags.save(path)


class Mp4Codec(TagCodec):
    """iTunes-style MP4 atoms."""

    SUFFIXES: ClassVar[tuple[str, ...]] = (".m4a", ".mp4", ".aac")

    ATOMS: ClassVar[dict[FieldId, str]] = {
        FieldId.ALBUM_ARTIST: "aART",
        FieldId.ALBUM: "\xa9alb",
        FieldId.ARTIST: "\xa9ART",
        FieldId.TITLE: "\xa9nam",
        FieldId.YEAR: "\xa9day",
    }
    PAIRS: ClassVar[dict[FieldId, str]] = {
        FieldId.DISC: "disk",
        FieldId.TRACK: "trkn",
    }
    FREEFORM_PREFIX: ClassVar[str] = "----:com.apple.iTunes:"

    @override
    def _read(self, path: Path) -> dict[str, object]:
        audio = MP4(path)
        tags = cast(dict[str, Any], audio.tags or {})
        raw: dict[str, object] = {}
        for field_id, atom in self.ATOMS.items():
            values = tags.get(atom)
            if values:
                raw[field_id.value] = str(values[0])
        for field_id, atom in self.PAIRS.items():
            pairs = cast(list[tuple[int, int]] | None, tags.get(atom))
            if pairs:
                raw[field_id.value] = format_number_pair(pairs[0][0], pairs[0][1])
        raw[FieldId.COVER_IMAGES.value] = [bytes(cover) for cover in tags.get("covr", [])]

        custom: dict[str, str] = {}
        for key, values in tags.items():
            if key.startswith(self.FREEFORM_PREFIX) and values:
                custom[key[len(self.FREEFORM_PREFIX):]] = bytes(values[0]).decode(
                    "utf-8", errors="replace"
                )
        raw[FieldId.CUSTOM_TEXT.value] = custom
        return raw

    @override
    def _write(self, path: Path, fields: FieldMap, changes: FieldChanges | None) -> None:
        audio = MP4(path)
        if audio.tags is None:
            audio.add_tags()
        tags = cast(dict[str, Any], audio.tags)

        for field_id, atom in self.ATOMS.items():
            if not _touches(changes, field_id):
                continue
            _ = tags.pop(atom, None)
            value = _text(fields, field_id)
            if value:
                tags[atom] = [value]

        for field_id, atom in self.PAIRS.items():
            if not _touches(changes, field_id):
                continue
            _ = tags.pop(atom, None)
            value = _text(fields, field_id)
            if not value:
                continue
            num, total = parse_slash_separated(value)
            if num is None:
                logger.warning("Dropping non-numeric %s %r for %s", field_id, value, path)
                continue
            tags[atom] = [(num, total or 0)]

        if _touches(changes, FieldId.COVER_IMAGES):
            _ = tags.pop("covr", None)
            images = _images(fields)
            if images:
                tags["covr"] = [
                    MP4Cover(
                        image,
                        imageformat=(
                            MP4Cover.FORMAT_PNG if image_mime(image) == PNG_MIME else MP4Cover.FORMAT_JPEG
                        ),
                    )
                    for image in images
                ]

        custom = _custom(fields)
        if changes is None:
            for key in [key for key in tags if key.startswith(self.FREEFORM_PREFIX)]:
                del tags[key]
        for desc in _custom_keys(changes, fields):
            _ = tags.pop(self.FREEFORM_PREFIX + desc, None)
            if desc in custom:
                tags[self.FREEFORM_PREFIX + desc] = [MP4FreeForm(custom[desc].encode("utf-8"))]
        audio.save()


class FlacCodec(TagCodec):
    """Vorbis comments and FLAC picture blocks."""

    SUFFIXES: ClassVar[tuple[str, ...]] = (".flac",)

    COMMENTS: ClassVar[dict[FieldId, str]] = {
        FieldId.ALBUM_ARTIST: "albumartist",
        FieldId.ALBUM: "album",
        FieldId.DISC: "discnumber",
        FieldId.TRACK: "tracknumber",
        FieldId.ARTIST: "artist",
        FieldId.TITLE: "title",
        FieldId.YEAR: "date",
    }

    @staticmethod
    def _custom_key(key: str) -> str:
        # Vorbis keys are case-insensitive and mutagen lists them lower-cased.
        return COMPILATION_KEY if key.upper() == COMPILATION_KEY else key.lower()

    @override
    def _read(self, path: Path) -> dict[str, object]:
        audio = FLAC(path)
        raw: dict[str, object] = {}
        comments = audio.tags
        known = set(self.COMMENTS.values())
        custom: dict[str, str] = {}
        if comments is not None:
            for field_id, key in self.COMMENTS.items():
                values = comments.get(key)
                if values:
                    raw[field_id.value] = str(values[0])
            for key in comments.keys():
                if key.lower() in known:
                    continue
                values = comments.get(key)
                if values:
                    custom[self._custom_key(key)] = str(values[0])
        raw[FieldId.CUSTOM_TEXT.value] = custom
        raw[FieldId.COVER_IMAGES.value] = [picture.data for picture in audio.pictures]
        return raw

    @override
    def _write(self, path: Path, fields: FieldMap, changes: FieldChanges | None) -> None:
        audio = FLAC(path)
        if audio.tags is None:
            audio.add_tags()
        comments = audio.tags
        if comments is None:
            raise TagCodecError(path, "could not create Vorbis comments")

        if changes is None:
            for key in list(comments.keys()):
                del comments[key]
        for field_id, key in self.COMMENTS.items():
            if not _touches(changes, field_id):
                continue
            if key in comments:
                del comments[key]
            value = _text(fields, field_id)
            if value:
                comments[key] = [value]

        custom = _custom(fields)
        for desc in _custom_keys(changes, fields):
            if desc in comments:
                del comments[desc]
            if desc in custom:
                comments[desc] = [custom[desc]]

        if _touches(changes, FieldId.COVER_IMAGES):
            types = {picture.data: picture.type for picture in audio.pictures}
            audio.clear_pictures()
            for index, image in enumerate(_images(fields)):
                picture = Picture()
                picture.type = types.get(image, FRONT_COVER if index == 0 else 0)
                picture.mime = image_mime(image)
                picture.desc = str(index)
                picture.data = image
                audio.add_picture(picture)
        audio.save()
