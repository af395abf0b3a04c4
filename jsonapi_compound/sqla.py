# sqla.py: jsonapi resources for SQLAlchemy model instances
#
# pylint: disable=protected-access
#
from typing import Any, Dict, List, Type
from sqlalchemy import inspect as sqla_inspect
from sqlalchemy.orm import RelationshipProperty
from .resource import JsonApiResource, RelationshipProducer


class SQLAlchemyResource(JsonApiResource):
    """
    JsonApiResource for SQLAlchemy mapped instances, the resource object is generated from the mapper:
    - id: the primary key(s), composite keys are joined with `_s_pk_delimiter`
    - attributes: the mapped columns, except the primary keys
    - relationships: the mapper relationships

    The relationship attributes are only read when the relationship producer is called,
    so unrequested relationships are never lazy loaded.

    Subclasses that set the `model` class attribute are used to render the related instances
    of that model, eg.

        class BookResource(SQLAlchemyResource):
            model = Book
            exclude_attrs = ["isbn"]
    """

    model = None
    exclude_attrs: List[str] = []  # list of attribute names that should not be serialized
    exclude_rels: List[str] = []  # list of relationship names that should not be serialized
    _s_pk_delimiter = "_"

    _resource_classes: Dict[type, Type["SQLAlchemyResource"]] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.model is not None:
            SQLAlchemyResource._resource_classes[cls.model] = cls

    @classmethod
    def resource_for(cls, instance: Any) -> "SQLAlchemyResource":
        """
        :param instance: sqla model instance
        :return: instance wrapped in the resource class registered for its model (or a superclass of it)
        """
        for model in type(instance).__mro__:
            resource_class = SQLAlchemyResource._resource_classes.get(model)
            if resource_class is not None:
                return resource_class(instance)
        return SQLAlchemyResource(instance)

    @property
    def _s_mapper(self):
        return sqla_inspect(type(self.resource))

    def to_id(self, request: Any) -> str:
        """
        The id has to be of type string according to the jsonapi json validation schema
        """
        mapper = self._s_mapper
        values = [getattr(self.resource, mapper.get_property_by_column(col).key) for col in mapper.primary_key]
        return self._s_pk_delimiter.join(str(value) for value in values)

    def to_attributes(self, request: Any) -> Dict[str, Any]:
        mapper = self._s_mapper
        pk_names = {mapper.get_property_by_column(col).key for col in mapper.primary_key}
        result = {}
        for attr in mapper.column_attrs:
            if attr.key in pk_names or attr.key in self.exclude_attrs:
                continue
            result[attr.key] = getattr(self.resource, attr.key)
        return result

    def to_relationships(self, request: Any) -> Dict[str, RelationshipProducer]:
        return {
            relationship.key: self._relationship_producer(relationship)
            for relationship in self._s_mapper.relationships
            if relationship.key not in self.exclude_rels
        }

    def _relationship_producer(self, relationship: RelationshipProperty) -> RelationshipProducer:
        """
        :param relationship: mapper relationship
        :return: producer that loads the related instance(s)
        """

        def producer(request):
            related = getattr(self.resource, relationship.key)
            if relationship.uselist:
                # InstrumentedList or lazy="dynamic" query
                return [self.resource_for(item) for item in related]
            if related is None:
                return None
            return self.resource_for(related)

        return producer
