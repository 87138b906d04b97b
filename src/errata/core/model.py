"""
Model base classes: declarative subjects that own an error collection.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional, Type

from ..exceptions import ErrataError, ErrorKind
from ..utils import humanize
from .fields import Field

if TYPE_CHECKING:
    from ..errors import Errors


class ModelConfigurationError(Exception):
    """Raised when a model class is misconfigured."""


@dataclass
class ModelOptions:
    """
    Container for model metadata calculated by :class:`ModelMeta`.
    """

    model: Type["Model"]
    fields: "OrderedDict[str, Field]" = field(default_factory=OrderedDict)

    def add_field(self, field_obj: Field) -> None:
        if field_obj.name in self.fields:
            raise ModelConfigurationError(
                f"Duplicate field name '{field_obj.name}' on model '{self.model.__name__}'"
            )
        self.fields[field_obj.name] = field_obj

    def get_field(self, name: str) -> Field:
        try:
            return self.fields[name]
        except KeyError as exc:
            raise KeyError(f"Unknown field '{name}' on model '{self.model.__name__}'") from exc

    def get_fields(self) -> Iterable[Field]:
        return self.fields.values()

    def has_field(self, name: str) -> bool:
        return name in self.fields


class ModelMeta(type):
    """
    Metaclass responsible for collecting fields and establishing metadata.
    """

    def __new__(mcls, name: str, bases: tuple[type, ...], attrs: Dict[str, Any]) -> "ModelMeta":
        declared_fields: Dict[str, Field] = {}
        for attr_name, value in list(attrs.items()):
            if isinstance(value, Field):
                declared_fields[attr_name] = attrs.pop(attr_name)

        cls = super().__new__(mcls, name, bases, attrs)
        cls._meta = ModelOptions(model=cls)

        # Inherited fields come first, in their parent's declaration order.
        for base in reversed(cls.__mro__[1:]):
            base_meta = base.__dict__.get("_meta")
            if isinstance(base_meta, ModelOptions):
                for field_name, field_obj in base_meta.fields.items():
                    if field_name not in cls._meta.fields and field_name not in declared_fields:
                        cls._meta.fields[field_name] = field_obj

        sorted_fields = sorted(declared_fields.items(), key=lambda item: item[1].creation_counter)
        for attr_name, field_obj in sorted_fields:
            field_obj.contribute_to_class(cls, attr_name)
            cls._meta.add_field(field_obj)

        return cls


class Model(metaclass=ModelMeta):
    """
    Base model providing a data container that errors can be attached to.
    """

    _meta: ModelOptions

    def __init__(self, **kwargs: Any) -> None:
        self._field_values: Dict[str, Any] = {}
        self._errors: Optional["Errors"] = None

        unknown = set(kwargs) - set(self._meta.fields)
        if unknown:
            raise TypeError(
                f"{self.__class__.__name__} got unexpected fields: {', '.join(sorted(unknown))}"
            )

        for field_obj in self._meta.get_fields():
            if field_obj.name in kwargs:
                setattr(self, field_obj.name, kwargs[field_obj.name])
            elif field_obj.has_default:
                setattr(self, field_obj.name, field_obj.get_default())

    def __repr__(self) -> str:
        field_parts = ", ".join(
            f"{name}={value!r}" for name, value in self._field_values.items()
        )
        return f"<{self.__class__.__name__} {field_parts}>"

    def to_dict(self) -> Dict[str, Any]:
        return {field_obj.name: getattr(self, field_obj.name) for field_obj in self._meta.get_fields()}

    # Subject protocol --------------------------------------------------
    def has_attribute(self, name: str) -> bool:
        return self._meta.has_field(name)

    @classmethod
    def human_attribute_name(cls, name: str) -> str:
        field_obj = cls._meta.fields.get(name)
        if field_obj is not None and field_obj.label:
            return field_obj.label
        return humanize(name)

    # Validation --------------------------------------------------------
    @property
    def errors(self) -> "Errors":
        if self._errors is None:
            from ..errors import Errors

            self._errors = Errors(self)
        return self._errors

    def clean(self) -> None:
        """
        Hook for subclasses to record failures on ``self.errors``.
        """
        return None

    def is_valid(self) -> bool:
        self.errors.clear()
        self.clean()
        return not self.errors

    def full_clean(self) -> None:
        if not self.is_valid():
            raise ErrataError(
                ErrorKind.INVALID_SUBJECT,
                f"{self.__class__.__name__} is invalid: {'; '.join(self.errors.full_messages())}",
                errors=self.errors,
            )
