"""Registry of EXT-X-MEDIA alternate renditions keyed by ``(type, group-id)``."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from ..models import Alternate, RenditionType
from ..utils.errors import NotFoundError, OutOfRangeError

GroupKey = Tuple[RenditionType, str]


class MediaGroup:
    """Alternates sharing one GROUP-ID, plus the explicitly chosen one."""

    def __init__(self, rendition_type: RenditionType, group_id: str) -> None:
        self.rendition_type = rendition_type
        self.group_id = group_id
        self._alternates: List[Alternate] = []
        self._selected_index = -1

    @property
    def key(self) -> GroupKey:
        return self.rendition_type, self.group_id

    @property
    def alternates(self) -> Tuple[Alternate, ...]:
        return tuple(self._alternates)

    @property
    def selected_index(self) -> int:
        return self._selected_index

    def __len__(self) -> int:
        return len(self._alternates)

    def append(self, alternate: Alternate) -> None:
        self._alternates.append(alternate)

    def default_index(self) -> int:
        """Index of the first alternate marked DEFAULT=YES, or -1."""

        for index, alternate in enumerate(self._alternates):
            if alternate.is_default:
                return index
        return -1

    def effective_index(self) -> int:
        """The alternate used for URI resolution: chosen, then default, then a lone one."""

        if self._selected_index >= 0:
            return self._selected_index
        default = self.default_index()
        if default >= 0:
            return default
        if len(self._alternates) == 1:
            return 0
        return -1

    def effective_alternate(self) -> Optional[Alternate]:
        index = self.effective_index()
        return self._alternates[index] if index >= 0 else None

    def select(self, index: int, select: bool = True) -> None:
        if not 0 <= index < len(self._alternates):
            raise OutOfRangeError(
                f"alternate {index} out of range for {self.rendition_type.value} group {self.group_id!r}"
            )
        if select:
            self._selected_index = index
        elif self._selected_index == index:
            self._selected_index = -1


class MediaGroupRegistry:
    """Keeps one :class:`MediaGroup` per ``(type, group-id)`` in creation order."""

    def __init__(self) -> None:
        self._groups: Dict[GroupKey, MediaGroup] = {}

    def get_or_create(self, rendition_type: RenditionType, group_id: str) -> MediaGroup:
        key = (rendition_type, group_id)
        group = self._groups.get(key)
        if group is None:
            group = MediaGroup(rendition_type, group_id)
            self._groups[key] = group
        return group

    def append(self, rendition_type: RenditionType, group_id: str, alternate: Alternate) -> MediaGroup:
        group = self.get_or_create(rendition_type, group_id)
        group.append(alternate)
        return group

    def lookup(self, rendition_type: RenditionType, group_id: Optional[str]) -> Optional[MediaGroup]:
        if group_id is None:
            return None
        return self._groups.get((rendition_type, group_id))

    def require(self, rendition_type: RenditionType, group_id: str) -> MediaGroup:
        group = self.lookup(rendition_type, group_id)
        if group is None:
            raise NotFoundError(f"no {rendition_type.value} group {group_id!r}")
        return group

    def __iter__(self) -> Iterator[MediaGroup]:
        return iter(list(self._groups.values()))

    def __len__(self) -> int:
        return len(self._groups)

    def __contains__(self, key: object) -> bool:
        return key in self._groups


class MediaGroupView:
    """Read-only window onto a :class:`MediaGroup`."""

    def __init__(self, group: MediaGroup) -> None:
        self._group = group

    @property
    def rendition_type(self) -> RenditionType:
        return self._group.rendition_type

    @property
    def group_id(self) -> str:
        return self._group.group_id

    @property
    def key(self) -> GroupKey:
        return self._group.key

    @property
    def alternates(self) -> Tuple[Alternate, ...]:
        return self._group.alternates

    @property
    def selected_index(self) -> int:
        return self._group.selected_index

    def __len__(self) -> int:
        return len(self._group)

    def default_index(self) -> int:
        return self._group.default_index()

    def effective_index(self) -> int:
        return self._group.effective_index()

    def effective_alternate(self) -> Optional[Alternate]:
        return self._group.effective_alternate()


class MediaGroupRegistryView:
    """Lookup-only access to a registry; groups come back as :class:`MediaGroupView`."""

    def __init__(self, registry: MediaGroupRegistry) -> None:
        self._registry = registry

    def lookup(self, rendition_type: RenditionType, group_id: Optional[str]) -> Optional[MediaGroupView]:
        group = self._registry.lookup(rendition_type, group_id)
        return MediaGroupView(group) if group is not None else None

    def require(self, rendition_type: RenditionType, group_id: str) -> MediaGroupView:
        return MediaGroupView(self._registry.require(rendition_type, group_id))

    def __iter__(self) -> Iterator[MediaGroupView]:
        return iter([MediaGroupView(group) for group in self._registry])

    def __len__(self) -> int:
        return len(self._registry)

    def __contains__(self, key: object) -> bool:
        return key in self._registry
