"""
Subjects that errors are attached to.
"""

from .fields import BooleanField, Field, FieldError, IntegerField, StringField
from .model import Model, ModelConfigurationError, ModelMeta, ModelOptions
from .subject import Subject

__all__ = [
    "BooleanField",
    "Field",
    "FieldError",
    "IntegerField",
    "Model",
    "ModelConfigurationError",
    "ModelMeta",
    "ModelOptions",
    "StringField",
    "Subject",
]
