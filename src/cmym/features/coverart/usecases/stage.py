"""Summary: Cover-art review stage merging embedded, folder and remote images.
Why: Let the operator pick, order and prune album artwork from every source at once.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from functools import partial
from typing import ClassVar, override

from cmym.features.coverart.domain import CoverArtGroup, images_fingerprint
from cmym.features.proposals import ProposalGroup, Stage
from cmym.platform.logging import logger
from cmym.shared.review_events import ReviewEvent
from cmym.shared.track_store import FieldId, TrackRecord, TrackStore

from .ports import ImagePreviewPort, RemoteArtworkPort
from .sources import (
    SOURCE_ERRORS,
    collect_images,
    embedded_images,
    folder_images,
    remote_images,
)

_COMMAND = re.compile(r"^([dov]?)(\d+)$")
_URL = re.compile(r"^https?://", re.IGNORECASE)


class CoverArtStage(Stage):
    """Album-level cover image review.

    Operator edits are commands rather than values: ``N`` moves image N to the
    front, ``dN`` deletes it, ``oN`` keeps only it, ``vN`` previews it and an
    http(s) URL is downloaded and appended. Commands keep the cursor in place.
    Folder and remote candidates are only gathered when a group is first shown.
    """

    stage_id: ClassVar[str] = "cover-art"
    title: ClassVar[str] = "Cover art"
    field: ClassVar[FieldId] = FieldId.COVER_IMAGES

    def __init__(
        self,
        remote: RemoteArtworkPort | None = None,
        preview: ImagePreviewPort | None = None,
        *,
        scan_folders: bool = True,
    ) -> None:
        self._remote: RemoteArtworkPort | None = remote
        self._preview: ImagePreviewPort | None = preview
        self._scan_folders: bool = scan_folders

    def group_key(self, record: TrackRecord) -> tuple[str, ...]:
        album = record.text(FieldId.ALBUM)
        fingerprint = images_fingerprint(record.cover_images)
        if not album:
            return ("", "", "", fingerprint, str(record.path))
        return (
            record.text(FieldId.ALBUM_ARTIST) or "",
            album,
            record.text(FieldId.DISC) or "",
            fingerprint,
        )

    @override
    def compute(self, store: TrackStore) -> list[ProposalGroup]:
        grouped: dict[tuple[str, ...], list[TrackRecord]] = {}
        for record in store:
            grouped.setdefault(self.group_key(record), []).append(record)

        groups: list[ProposalGroup] = []
        for key, members in sorted(grouped.items(), key=lambda item: str(item[0])):
            sources: list[tuple[str, Callable[[], list[bytes]]]] = []
            if self._scan_folders:
                sources.append(("folder", partial(folder_images, members)))
            if self._remote is not None:
                sources.append(("remote", partial(remote_images, self._remote, members)))

            album = members[0].text(FieldId.ALBUM)
            context = [
                ("Folder", ", ".join(sorted({str(member.folder) for member in members}))),
                ("Tracks", str(len(members))),
            ]
            if album:
                context.append(("Album", album))
            groups.append(
                CoverArtGroup(
                    field=self.field,
                    members=members,
                    old_value=None,
                    suggested_value=None,
                    key=key,
                    context=context,
                    existing=members[0].cover_images,
                    images=embedded_images(members[:1]),
                    loader=partial(collect_images, sources) if sources else None,
                )
            )
        return groups

    @override
    def edit(self, group: ProposalGroup, text: str) -> bool:
        if not isinstance(group, CoverArtGroup):
            return super().edit(group, text)

        group.ensure_loaded()
        command = text.strip()
        if _URL.match(command):
            self._append_from_url(group, command)
            return False

        matched = _COMMAND.match(command)
        if matched is None:
            logger.warning("Unknown cover art command: %r", command)
            return False

        action, number = matched.groups()
        index = int(number) - 1
        try:
            if action == "d":
                group.delete(index)
            elif action == "o":
                group.narrow(index)
            elif action == "v":
                if not 0 <= index < len(group.images):
                    raise IndexError(f"No image #{number}")
                if self._preview is not None:
                    self._preview.set(group.images[index])
            else:
                group.select(index)
        except IndexError as exc:
            logger.warning("%s", exc)
        return False

    def _append_from_url(self, group: CoverArtGroup, url: str) -> None:
        if self._remote is None:
            logger.warning("Remote artwork is disabled; cannot fetch %s", url)
            return
        try:
            image = self._remote.fetch_image(url)
        except SOURCE_ERRORS as exc:
            logger.warning(
                "Could not fetch %s: %s",
                url,
                exc,
                extra={"review_event": ReviewEvent.COVER_SOURCE_ERROR},
            )
            return
        if not group.append(image):
            logger.info("Image from %s is already in the list", url)

    @override
    def apply(self, store: TrackStore, group: ProposalGroup) -> None:
        del store
        images = group.resulting_images() if isinstance(group, CoverArtGroup) else []
        for member in group.members:
            member.set_cover_images(images)
        logger.debug(
            "Applied %d cover image(s) to %d track(s)",
            len(images),
            len(group.members),
            extra={"review_event": ReviewEvent.GROUP_DECISION},
        )


__all__ = ["CoverArtStage"]
