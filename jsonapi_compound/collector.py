from typing import Any, Dict, Iterable, Iterator, List, Set
from .resource import ResourceIdentifier


class IncludedSet:
    """
    Ordered collection of the resources that will be serialized in the `included` part
    of the jsonapi document.

    https://jsonapi.org/format/#document-compound-documents :
    A compound document MUST NOT include more than one resource object for each type and id pair.

    Resources are kept in the order they were first added, subsequent resources with an
    identifier that has already been seen are dropped. The identifiers passed as `exclude`
    (the primary data) are never included.
    An IncludedSet is created for every rendered document, it must not be shared between requests
    """

    def __init__(self, exclude: Iterable[ResourceIdentifier] = ()) -> None:
        self._excluded: Set[ResourceIdentifier] = set(exclude)
        self._included: Dict[ResourceIdentifier, Any] = {}

    def exclude(self, identifier: ResourceIdentifier) -> None:
        """
        :param identifier: identifier of a resource that must not be included (i.e. primary data)
        """
        self._excluded.add(identifier)

    def add(self, node: Any, identifier: ResourceIdentifier) -> bool:
        """
        :param node: resource node to include
        :param identifier: the node's resource identifier
        :return: True if the node was added, False if the identifier has already been seen
        """
        if identifier in self._excluded or identifier in self._included:
            return False
        self._included[identifier] = node
        return True

    @property
    def nodes(self) -> List[Any]:
        """
        :return: the included nodes in insertion order
        """
        return list(self._included.values())

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._included

    def __iter__(self) -> Iterator[Any]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self._included)
