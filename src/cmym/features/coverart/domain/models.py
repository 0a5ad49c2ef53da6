"""Summary: Proposal group holding a candidate cover image list.
Why: Cover art is reviewed by reordering and pruning images, not by editing text.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from cmym.features.proposals import ProposalGroup

from .images import dedupe_images, summarize_images


@dataclass(eq=False)
class CoverArtGroup(ProposalGroup):
    """Album-level group whose proposal is an ordered list of images.

    ``existing`` is what the members carry today; ``images`` is the merged
    candidate list the operator shapes before confirming. ``loader`` yields
    the slower candidates (folder files, remote search) and runs once, when
    the group is first shown.
    """

    existing: list[bytes] = field(default_factory=list)
    images: list[bytes] = field(default_factory=list)
    loader: Callable[[], list[bytes]] | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        super().__post_init__()
        self.images = dedupe_images(self.images)
        self._refresh()

    @property
    def is_satisfied(self) -> bool:
        return self.images == self.existing

    @property
    def empties_forbidden_field(self) -> bool:
        return not self.can_be_empty and not self.images

    def ensure_loaded(self) -> None:
        if self.loader is None:
            return
        loader, self.loader = self.loader, None
        self.images = dedupe_images([*self.images, *loader()])
        self._refresh()

    def _check(self, index: int) -> None:
        if not 0 <= index < len(self.images):
            raise IndexError(f"No image #{index + 1}; {len(self.images)} available")

    def _refresh(self) -> None:
        self.old_value = summarize_images(self.existing)
        self.suggested_value = summarize_images(self.images)

    def select(self, index: int) -> None:
        """Move image ``index`` to the front of the list."""

        self._check(index)
        self.images.insert(0, self.images.pop(index))
        self._refresh()

    def delete(self, index: int) -> None:
        self._check(index)
        del self.images[index]
        self._refresh()

    def narrow(self, index: int) -> None:
        """Keep only image ``index``."""

        self._check(index)
        self.images = [self.images[index]]
        self._refresh()

    def append(self, image: bytes) -> bool:
        """Append ``image`` unless already present; True when added."""

        merged = dedupe_images([*self.images, image])
        added = len(merged) > len(self.images)
        self.images = merged
        self._refresh()
        return added

    def clear(self) -> None:
        super().clear()
        self.images = []

    def resulting_images(self) -> list[bytes]:
        """Images the members will carry once the decision is applied."""

        if self.decision is None:
            return list(self.existing)
        return list(self.images)


__all__ = ["CoverArtGroup"]
