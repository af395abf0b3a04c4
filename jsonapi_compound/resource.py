# resource.py: the resource node interface and the JsonApiResource wrapper
#
# A resource node is anything that can supply its jsonapi identity, attributes and
# relationships. JsonApiResource wraps an application entity and provides the
# defaults, subclasses override the to_* hooks to customize the resource object.
#
from functools import lru_cache
from typing import Any, Callable, Dict, Iterable, List, NamedTuple, Optional, Protocol, runtime_checkable
import inflect


RelationshipProducer = Callable[[Any], Any]

_inflect = inflect.engine()


class ResourceIdentifier(NamedTuple):
    """
    jsonapi resource identifier object, two identifiers are equal when both type and id match
    """

    type: str
    id: str

    def encode(self) -> Dict[str, str]:
        return {"id": self.id, "type": self.type}


@runtime_checkable
class ResourceNode(Protocol):
    """
    Capabilities required to render an entity as a jsonapi resource object
    """

    def resource_identifier(self, request: Any) -> ResourceIdentifier:
        ...

    def resource_attributes(self, request: Any) -> Dict[str, Any]:
        ...

    def resource_relationships(self, request: Any) -> Dict[str, RelationshipProducer]:
        ...


def is_resource_node(obj: Any) -> bool:
    """
    :param obj: relationship producer result
    :return: whether obj can be rendered as a resource object
    """
    return isinstance(obj, ResourceNode)


@lru_cache(maxsize=256)
def type_from_class_name(class_name: str) -> str:
    """
    :param class_name: eg. "BasicModel"
    :return: the camelcased plural, eg. "basicModels"
    """
    camel = class_name[:1].lower() + class_name[1:]
    return _inflect.plural(camel)


class JsonApiResource:
    """
    Wraps an application entity (the "resource") so it can be rendered as a jsonapi resource object.

    Override these to customize the rendering, all of them receive the request context:
    - to_id: the jsonapi id, `str(resource.id)` by default
    - to_type: the jsonapi type, the camelcased plural class name of the resource by default
    - to_attributes: dict of attribute name -> json serializable value, empty by default
    - to_relationships: dict of relationship name -> producer, empty by default.
      A producer is called with the request and returns a resource, None or a list of resources.
      Producers are only called when the relationship was requested with the include parameter,
      so the relationship data shouldn't be fetched before the producer is called:

        def to_relationships(self, request):
            return {"author": lambda request: UserResource.make(self.author)}

    Attributes that aren't defined on the resource wrapper are looked up on the wrapped resource
    """

    def __init__(self, resource: Any) -> None:
        self.resource = resource

    def __getattr__(self, name: str) -> Any:
        if name == "resource":
            # not initialized yet (eg. copy/pickle)
            raise AttributeError(name)
        return getattr(self.resource, name)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.resource!r}>"

    @classmethod
    def make(cls, resource: Any) -> Optional["JsonApiResource"]:
        """
        :param resource: entity to wrap
        :return: resource wrapper, or None for a missing to-one relationship
        """
        if resource is None:
            return None
        return cls(resource)

    @classmethod
    def collection(cls, resources: Iterable[Any]) -> List["JsonApiResource"]:
        """
        :param resources: entities to wrap
        :return: list of resource wrappers
        """
        return [cls(resource) for resource in resources]

    def to_id(self, request: Any) -> str:
        return str(self.resource.id)

    def to_type(self, request: Any) -> str:
        return type_from_class_name(self.resource.__class__.__name__)

    def to_attributes(self, request: Any) -> Dict[str, Any]:
        return {}

    def to_relationships(self, request: Any) -> Dict[str, RelationshipProducer]:
        return {}

    # ResourceNode implementation
    def resource_identifier(self, request: Any) -> ResourceIdentifier:
        return ResourceIdentifier(type=self.to_type(request), id=self.to_id(request))

    def resource_attributes(self, request: Any) -> Dict[str, Any]:
        return dict(self.to_attributes(request))

    def resource_relationships(self, request: Any) -> Dict[str, RelationshipProducer]:
        return dict(self.to_relationships(request))
