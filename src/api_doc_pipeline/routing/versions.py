"""Version descriptor lookup by document name."""

from collections.abc import Iterable, Iterator

from api_doc_pipeline.routing.base import VersionDescriptor


class VersionDescriptorProvider:
    """Read-only set of known API versions, ordered by version number."""

    def __init__(self, descriptors: Iterable[VersionDescriptor]):
        self._descriptors = sorted(descriptors, key=lambda d: (d.version.major, d.version.minor))
        self._by_name: dict[str, VersionDescriptor] = {}
        for descriptor in self._descriptors:
            if descriptor.name in self._by_name:
                raise ValueError(f"Duplicate API version name: {descriptor.name}")
            self._by_name[descriptor.name] = descriptor

    def __iter__(self) -> Iterator[VersionDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    @property
    def names(self) -> list[str]:
        return [d.name for d in self._descriptors]

    def find(self, name: str) -> VersionDescriptor | None:
        """Return the descriptor for a document name, or None if there is none."""
        return self._by_name.get(name)
