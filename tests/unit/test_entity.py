import pytest

from entities import Entity
from utils.errors import NotSetError, ValidationError


class SampleEntity(Entity):
    allowed_fields = ["id", "brand", "code", "description", "model"]


class Customer(Entity):
    allowed_fields = ("id", "email", "name")

    def set_email(self, value):
        self._values["email"] = str(value).strip().lower()

    def get_name(self):
        return self._values.get("name", "").title()


def test_constructor_routes_fields_through_setter():
    entity = SampleEntity({"id": 1, "brand": "acme"}, model="x1")
    assert entity.to_dict() == {"id": 1, "brand": "acme", "model": "x1"}


def test_constructor_rejects_unknown_field():
    with pytest.raises(ValidationError, match="Setting the field 'price' is not allowed"):
        SampleEntity({"id": 1, "price": 10})


@pytest.mark.parametrize(
    "operation, message",
    [
        (lambda e: e.get("price"), "Getting the field 'price'"),
        (lambda e: e.set("price", 1), "Setting the field 'price'"),
        (lambda e: e.has("price"), "The field 'price' is not allowed"),
        (lambda e: e.unset("price"), "Unsetting the field 'price'"),
    ],
)
def test_every_operation_checks_the_allow_list(operation, message):
    entity = SampleEntity()
    with pytest.raises(ValidationError, match=message):
        operation(entity)


def test_attribute_syntax_is_validated_too():
    entity = SampleEntity()
    entity.brand = "acme"
    assert entity.brand == "acme"
    assert "brand" in entity
    del entity.brand
    assert "brand" not in entity

    with pytest.raises(ValidationError):
        entity.price = 10
    with pytest.raises(ValidationError):
        entity.price
    with pytest.raises(ValidationError):
        del entity.price


def test_set_then_get_round_trips():
    entity = SampleEntity()
    for name in SampleEntity.allowed_fields:
        entity.set(name, f"value-{name}")
        assert entity.get(name) == f"value-{name}"


def test_none_counts_as_a_stored_value():
    entity = SampleEntity(description=None)
    assert entity.has("description") is True
    assert entity.get("description") is None


def test_get_unset_field_raises_not_set():
    with pytest.raises(NotSetError, match="The field 'code' has not been set for this entity yet."):
        SampleEntity().get("code")


def test_unset_semantics():
    entity = SampleEntity({"code": "A-1"})
    assert entity.unset("code") is True
    assert entity.has("code") is False
    with pytest.raises(NotSetError):
        entity.unset("code")
    with pytest.raises(NotSetError):
        SampleEntity().unset("model")


def test_mutator_transforms_value_on_set_and_constructor():
    customer = Customer({"email": "  Ada@Example.COM "})
    assert customer.get("email") == "ada@example.com"
    customer.email = "GRACE@example.com"
    assert customer.email == "grace@example.com"


def test_accessor_is_used_by_get_but_not_by_has_or_to_dict():
    customer = Customer()
    assert customer.has("name") is False
    assert customer.get("name") == ""

    customer.set("name", "ada lovelace")
    assert customer.get("name") == "Ada Lovelace"
    assert customer.to_dict() == {"name": "ada lovelace"}


def test_to_dict_is_a_snapshot():
    entity = SampleEntity(id=7)
    snapshot = entity.to_dict()
    snapshot["brand"] = "changed"
    assert entity.has("brand") is False


def test_allowed_fields_is_frozen_per_subclass():
    assert SampleEntity.allowed_fields == ("id", "brand", "code", "description", "model")
    assert Customer._mutators.keys() == {"email"}
    assert Customer._accessors.keys() == {"name"}


def test_invalid_allow_list_is_rejected_at_definition():
    with pytest.raises(TypeError):

        class Broken(Entity):
            allowed_fields = "id"

    with pytest.raises(TypeError):

        class Empty(Entity):
            allowed_fields = ("id", "")


def test_base_entity_cannot_be_instantiated():
    with pytest.raises(TypeError):
        Entity()


def test_attribute_access_follows_python_protocol():
    entity = SampleEntity(brand="acme")
    assert hasattr(entity, "brand") is True
    assert hasattr(entity, "code") is False
    assert hasattr(entity, "price") is False
    assert getattr(entity, "code", "n/a") == "n/a"
    assert getattr(entity, "price", None) is None

    with pytest.raises(NotSetError):
        entity.code
    with pytest.raises(AttributeError, match="'price' is not allowed"):
        entity.price


def test_underscore_field_names_are_allowed_through_methods():
    class Document(Entity):
        allowed_fields = ("_id", "title")

    document = Document({"_id": "5f1c", "title": "Report"})
    assert document.get("_id") == "5f1c"
    assert document.has("_id") is True
    assert document.to_dict() == {"_id": "5f1c", "title": "Report"}
    assert not hasattr(document, "_id")

    assert document.unset("_id") is True
    assert document.has("_id") is False
    with pytest.raises(ValidationError):
        document.set("_rev", "1")
