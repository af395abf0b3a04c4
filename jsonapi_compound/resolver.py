# resolver.py: walks the resource graph along the requested include paths
#
# pylint: disable=logging-format-interpolation
#
from collections import deque
from collections.abc import Iterable, Mapping
from typing import Any, Deque, Dict, List, Sequence, Tuple
import jsonapi_compound
from .collector import IncludedSet
from .errors import JsonapiError, RelationshipResolutionFailure
from .include import IncludePath, group_paths
from .resource import ResourceIdentifier, is_resource_node


def is_collection(value: Any) -> bool:
    """
    :param value: relationship producer result
    :return: whether value holds a to-many relationship
    """
    if is_resource_node(value):
        return False
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes, Mapping))


def iter_targets(targets: Any) -> List[Any]:
    """
    :param targets: resolved relationship value: a node, None or a list of nodes
    :return: list of the related nodes
    """
    if targets is None:
        return []
    if isinstance(targets, list):
        return targets
    return [targets]


class RelationshipResolver:
    """
    Resolve the relationships requested with the include query parameter

    Resolution is breadth first: the relationships of all primary resources are resolved first,
    then the relationships of the resources they're related to, and so on.
    Every related resource is added to the `included` set before its own relationships are resolved,
    so the included resources end up in the order they were discovered.

    A relationship producer is only called when its name is the first segment of one of the
    include paths requested for the resource, and only once per resource instance:
    include=comments.likes,comments.author calls the "comments" producer once and resolves
    "likes" and "author" on each of the comments.

    Resources that have been included already (same type and id) are not resolved again,
    this also stops relationship cycles. The primary resources are never included.
    The resolver holds the state of one render and should not be reused.
    """

    def __init__(self, request: Any, included: IncludedSet = None) -> None:
        """
        :param request: request context passed to the resource hooks and relationship producers
        :param included: the set collecting the included resources
        """
        self.request = request
        self.included = included if included is not None else IncludedSet()
        # lookup tables keyed by id(node), the nodes are kept alive in self._nodes
        self._identifiers: Dict[int, ResourceIdentifier] = {}
        self._resolved: Dict[int, Dict[str, Any]] = {}
        self._nodes: List[Any] = []

    def identify(self, node: Any) -> ResourceIdentifier:
        """
        :param node: resource node
        :return: the node's resource identifier, calculated once per node
        """
        key = id(node)
        identifier = self._identifiers.get(key)
        if identifier is None:
            identifier = node.resource_identifier(self.request)
            self._identifiers[key] = identifier
            self._nodes.append(node)
        return identifier

    def resolved_relationships(self, node: Any) -> Dict[str, Any]:
        """
        :param node: resource node
        :return: dict of relationship name -> related node(s), for the relationships resolved for node
        """
        return self._resolved.get(id(node), {})

    def resolve(self, primaries: Sequence[Any], paths: Sequence[IncludePath]) -> IncludedSet:
        """
        :param primaries: the primary resource nodes
        :param paths: the requested include paths
        :return: the included set
        """
        for node in primaries:
            self.included.exclude(self.identify(node))

        queue: Deque[Tuple[Any, Sequence[IncludePath]]] = deque((node, paths) for node in primaries)
        while queue:
            node, node_paths = queue.popleft()
            queue.extend(self._resolve_node(node, node_paths))

        return self.included

    def _resolve_node(self, node: Any, paths: Sequence[IncludePath]) -> List[Tuple[Any, List[IncludePath]]]:
        """
        Call the producers of the requested relationships of node and include the results

        :return: list of (related node, include paths) for the related nodes that should be resolved next
        """
        key = id(node)
        if key in self._resolved:
            # same instance was passed twice
            return []
        relationships: Dict[str, Any] = {}
        self._resolved[key] = relationships

        groups = group_paths(paths)
        if not groups:
            return []

        result = []
        for rel_name, producer in node.resource_relationships(self.request).items():
            if rel_name not in groups:
                continue
            targets = self._invoke(node, rel_name, producer)
            relationships[rel_name] = targets
            suffixes = groups[rel_name]
            for target in iter_targets(targets):
                if self.included.add(target, self.identify(target)) and suffixes:
                    result.append((target, suffixes))

        for rel_name in groups:
            if rel_name not in relationships:
                jsonapi_compound.log.debug(f"{self.identify(node)} has no relationship '{rel_name}', include path ignored")

        return result

    def _invoke(self, node: Any, rel_name: str, producer: Any) -> Any:
        """
        :param node: owner of the relationship
        :param rel_name: relationship name
        :param producer: relationship producer
        :return: None, the related node or a list of related nodes
        """
        try:
            targets = producer(self.request)
            if is_collection(targets):
                # generators and queries are evaluated here
                targets = list(targets)
        except JsonapiError:
            raise
        except Exception as exc:
            raise RelationshipResolutionFailure(f"Failed to resolve '{rel_name}' of {self.identify(node)}: {exc}") from exc

        if targets is None or is_resource_node(targets):
            return targets
        if isinstance(targets, list) and all(is_resource_node(target) for target in targets):
            return targets

        raise RelationshipResolutionFailure(f"Relationship '{rel_name}' of {self.identify(node)} returned an invalid value: {targets!r}")
