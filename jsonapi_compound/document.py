# document.py: assemble the jsonapi document from the primary data and the included resources
#
# http://jsonapi.org/format/#document-top-level
#
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence
from flask import has_request_context, request as flask_request
from .include import IncludePath, parse_include
from .request import get_include_paths
from .resolver import RelationshipResolver, iter_targets
from .resource import is_resource_node


class DocumentAssembler:
    """
    Render primary data (a resource node, a list of resource nodes or None) as a jsonapi document

    {
        "data": { "id": ..., "type": ..., "attributes": {..}, "relationships": {..} },
        "included": [ ... ]
    }

    The "relationships" of a resource object hold the linkage of the relationships that
    were resolved for the include paths, the related resource objects are rendered in "included".
    "included" is only added when include paths were requested.
    """

    def __init__(self, request: Any = None, include_paths: Sequence[IncludePath] = ()) -> None:
        """
        :param request: request context passed to the resource hooks and relationship producers
        :param include_paths: parsed include paths
        """
        self.request = request
        self.include_paths = tuple(include_paths)
        self.resolver = RelationshipResolver(request)

    def assemble(self, data: Any) -> Dict[str, Any]:
        """
        :param data: primary data
        :return: jsonapi document dict
        """
        is_single = data is None or is_resource_node(data)
        primaries = iter_targets(data) if is_single else self._primary_collection(data)

        # traversal state is kept per render
        self.resolver = RelationshipResolver(self.request)
        included = self.resolver.resolve(primaries, self.include_paths)

        if is_single:
            document = dict(data=self.encode_resource(data) if data is not None else None)
        else:
            document = dict(data=[self.encode_resource(node) for node in primaries])

        if self.include_paths:
            document["included"] = [self.encode_resource(node) for node in included]

        return document

    def encode_resource(self, node: Any) -> Dict[str, Any]:
        """
        :param node: resource node
        :return: jsonapi resource object
        """
        identifier = self.resolver.identify(node)
        relationships = {
            rel_name: self.encode_linkage(targets) for rel_name, targets in self.resolver.resolved_relationships(node).items()
        }
        return dict(
            id=identifier.id,
            type=identifier.type,
            attributes=node.resource_attributes(self.request),
            relationships=relationships,
        )

    def encode_linkage(self, targets: Any) -> Any:
        """
        :param targets: resolved relationship: None, a resource node or a list of resource nodes
        :return: resource linkage, a list of linkage objects for to-many relationships
        """
        if not isinstance(targets, list):
            return {"data": self.resolver.identify(targets).encode() if targets is not None else None}

        result: List[Dict[str, Any]] = []
        seen = set()
        for target in targets:
            identifier = self.resolver.identify(target)
            if identifier in seen:
                continue
            seen.add(identifier)
            result.append({"data": identifier.encode()})
        return result

    @staticmethod
    def _primary_collection(data: Any) -> List[Any]:
        if isinstance(data, (str, bytes, Mapping)):
            raise TypeError(f"Invalid primary data: {data!r}")
        primaries = list(data)
        for node in primaries:
            if not is_resource_node(node):
                raise TypeError(f"Invalid primary data, not a resource: {node!r}")
        return primaries


def jsonapi_document(data: Any, include: Optional[str] = None, request: Any = None) -> Dict[str, Any]:
    """
    Create a jsonapi compound document

    :param data: the primary data: a resource, a list of resources or None
    :param include: include parameter value, if None the include paths are taken from the request
    :param request: request context, the current flask request by default
    :return: jsonapi document dict
    """
    if request is None and has_request_context():
        request = flask_request._get_current_object()  # pylint: disable=protected-access

    if include is None:
        include_paths = get_include_paths(request)
    else:
        include_paths = parse_include(include)

    return DocumentAssembler(request, include_paths).assemble(data)
