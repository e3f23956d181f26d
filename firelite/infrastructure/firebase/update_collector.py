"""Field path bookkeeping for one planned write.

An UpdateCollector is passed by reference through encode_fields while it
walks the document data. It tracks the current field path and collects the
update mask and the field transforms. Use a fresh instance per write.
"""

from __future__ import annotations

from firelite.infrastructure.firebase._rest_encoding import encode_field_transform
from firelite.infrastructure.firebase.field_value import FieldValue


class UpdateCollector:
    """Accumulates the update mask and field transforms of a single write.

    For every non-map leaf of the data, exactly one of the two lists gets
    its dotted path: transforms for sentinels, field_paths for everything
    else. Maps only contribute through their children.
    """

    def __init__(self) -> None:
        self._path: list[str] = []
        self.field_paths: list[str] = []
        self.transforms: list[dict] = []
        self.deleted_paths: list[str] = []

    @property
    def current_path(self) -> str:
        """Dotted path of the field being encoded."""
        return ".".join(self._path)

    def enter_field(self, name: str) -> None:
        self._path.append(name)

    def delete(self) -> None:
        """Record that the current path is to be removed from the document."""
        self.deleted_paths.append(self.current_path)

    def transform(self, field_value: FieldValue) -> None:
        """Record a transform for the current path."""
        self.transforms.append(encode_field_transform(field_value, self.current_path))

    def leave_field(self, add_mask: bool) -> None:
        """Finish the current field; mask it if it is a leaf without a transform."""
        path = self.current_path
        if add_mask and not (self.transforms and self.transforms[-1]["fieldPath"] == path):
            self.field_paths.append(path)
        self._path.pop()

    def mask(self) -> dict[str, list[str]]:
        """Return the DocumentMask message for the collected paths."""
        return {"fieldPaths": list(self.field_paths)}
