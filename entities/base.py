from __future__ import annotations

from abc import ABC
from typing import Any, Callable, ClassVar, Dict, Iterable, Mapping, Optional, Tuple

from utils.errors import FieldNotAllowedError, FieldNotSetError, NotSetError, ValidationError


class Entity(ABC):
    """Record whose addressable fields are fixed by ``allowed_fields``.

    Subclasses declare the allow-list and may customize a single field by
    defining ``get_<field>`` (accessor) or ``set_<field>`` (mutator). Mutators
    write to ``self._values`` directly; accessors usually read from it.

        class Product(Entity):
            allowed_fields = ("id", "code")

            def set_code(self, value):
                self._values["code"] = str(value).upper()

    Every read, write, check or removal of a field outside the allow-list
    raises ``ValidationError``. Attribute syntax (``e.code``) raises the
    ``AttributeError`` subclasses of the same errors, so ``hasattr`` and
    ``getattr(e, name, default)`` behave as usual. Fields whose name starts
    with an underscore are only reachable through ``get``/``set``/``has``/
    ``unset``; attribute syntax treats such names as plain attributes.
    """

    allowed_fields: ClassVar[Tuple[str, ...]] = ()

    _accessors: ClassVar[Dict[str, Callable[["Entity"], Any]]] = {}
    _mutators: ClassVar[Dict[str, Callable[["Entity", Any], None]]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        fields = cls.allowed_fields
        if isinstance(fields, str) or not isinstance(fields, Iterable):
            raise TypeError(f"{cls.__name__}.allowed_fields must be a sequence of field names")
        names = tuple(dict.fromkeys(fields))
        for name in names:
            if not isinstance(name, str) or not name:
                raise TypeError(f"{cls.__name__}.allowed_fields contains an invalid field name: {name!r}")
        cls.allowed_fields = names

        accessors: Dict[str, Callable[[Entity], Any]] = {}
        mutators: Dict[str, Callable[[Entity, Any], None]] = {}
        for name in names:
            accessor = getattr(cls, f"get_{name}", None)
            if callable(accessor):
                accessors[name] = accessor
            mutator = getattr(cls, f"set_{name}", None)
            if callable(mutator):
                mutators[name] = mutator
        cls._accessors = accessors
        cls._mutators = mutators

    def __init__(self, fields: Optional[Mapping[str, Any]] = None, **kwargs: Any):
        if type(self) is Entity:
            raise TypeError("Entity is abstract; declare a subclass with allowed_fields")
        object.__setattr__(self, "_values", {})
        initial: Dict[str, Any] = dict(fields or {})
        initial.update(kwargs)
        for name, value in initial.items():
            self.set(name, value)

    def _ensure_allowed(self, name: str, message: str) -> None:
        if name not in self.allowed_fields:
            raise ValidationError(message.format(name=name))

    def set(self, name: str, value: Any) -> None:
        self._ensure_allowed(name, "Setting the field '{name}' is not allowed for this entity.")
        mutator = self._mutators.get(name)
        if mutator is not None:
            mutator(self, value)
        else:
            self._values[name] = value

    def get(self, name: str) -> Any:
        self._ensure_allowed(name, "Getting the field '{name}' is not allowed for this entity.")
        accessor = self._accessors.get(name)
        if accessor is not None:
            return accessor(self)
        if name in self._values:
            return self._values[name]
        raise NotSetError(f"The field '{name}' has not been set for this entity yet.")

    def has(self, name: str) -> bool:
        # Raw storage only; accessors are not consulted.
        self._ensure_allowed(name, "The field '{name}' is not allowed for this entity.")
        return name in self._values

    def unset(self, name: str) -> bool:
        self._ensure_allowed(name, "Unsetting the field '{name}' is not allowed for this entity.")
        if name in self._values:
            del self._values[name]
            return True
        raise NotSetError(f"The field '{name}' has not been set for this entity yet.")

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal attribute lookup fails.
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self.get(name)
        except ValidationError as exc:
            raise FieldNotAllowedError(str(exc)) from exc
        except NotSetError as exc:
            raise FieldNotSetError(str(exc)) from exc

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            self.set(name, value)

    def __delattr__(self, name: str) -> None:
        if name.startswith("_"):
            object.__delattr__(self, name)
        else:
            self.unset(name)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return self.has(name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._values!r})"
