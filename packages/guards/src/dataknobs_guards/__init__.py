"""DataKnobs Guards Package

Composable runtime validation for values of unknown shape. Small guard
functions narrow untyped input (such as freshly parsed JSON) to typed values
and compose into guards for arrays, objects, records, unions and
optional or nullable fields.

- **Guards**: ``number``, ``string``, ``boolean``
- **Combinators**: ``array``, ``object``, ``record_of``, ``nullable``,
  ``optional``, ``either``
- **Checks**: ``is_`` (boolean predicate) and ``validate`` (lenient result)
- **Converters**: ``to_number``, ``to_string``, ``to_boolean``,
  ``string_boolean``, ``one_of``, ``enum_member``, ``as_``
- **Reshaping**: ``mapper``, ``rename``, ``rename_snake_to_camel``, ``decorate``

The module-level functions belong to a default validator set that raises a
``GuardError`` for every failure. Use ``create_validator_set`` for a set with
its own error handling.

Example:
    ```python
    from dataknobs_guards import array, either, is_, number, object, string

    point = object({"x": number, "y": number, "label": either(number, string)})
    point({"x": 1, "y": 2.5, "label": "A"})   # {'x': 1, 'y': 2.5, 'label': 'A'}

    is_([1, "2"], array(number))              # False
    ```
"""

from .casing import snake_to_camel
from .config import GuardConfig
from .exceptions import (
    FieldError,
    GuardConfigError,
    GuardError,
    KindMismatchError,
    MappingError,
    NotAMemberError,
    NotANumberError,
    NotASequenceError,
    NotAStructureError,
    UnionExhaustedError,
)
from .policy import ErrorPolicy, ReportingMode, logging_error_handler
from .types import MISSING, ErrorHandler, Guard, GuardResult
from .validators import ValidatorSet, create_validator_set

__version__ = "0.1.0"

default_validators = ValidatorSet()

number = default_validators.number
string = default_validators.string
boolean = default_validators.boolean
array = default_validators.array
object = default_validators.object  # noqa: A001
record_of = default_validators.record_of
nullable = default_validators.nullable
optional = default_validators.optional
either = default_validators.either
is_ = default_validators.is_
validate = default_validators.validate
to_number = default_validators.to_number
to_string = default_validators.to_string
to_boolean = default_validators.to_boolean
string_boolean = default_validators.string_boolean
one_of = default_validators.one_of
enum_member = default_validators.enum_member
as_ = default_validators.as_
mapper = default_validators.mapper
rename = default_validators.rename
rename_snake_to_camel = default_validators.rename_snake_to_camel
decorate = default_validators.decorate

__all__ = [
    "__version__",
    # Factory
    "ValidatorSet",
    "create_validator_set",
    "default_validators",
    "GuardConfig",
    "ErrorPolicy",
    "ReportingMode",
    "logging_error_handler",
    # Types
    "Guard",
    "GuardResult",
    "ErrorHandler",
    "MISSING",
    # Exceptions
    "GuardError",
    "KindMismatchError",
    "NotANumberError",
    "NotASequenceError",
    "NotAStructureError",
    "FieldError",
    "UnionExhaustedError",
    "NotAMemberError",
    "MappingError",
    "GuardConfigError",
    # Guards and combinators
    "number",
    "string",
    "boolean",
    "array",
    "object",
    "record_of",
    "nullable",
    "optional",
    "either",
    "is_",
    "validate",
    # Converters
    "to_number",
    "to_string",
    "to_boolean",
    "string_boolean",
    "one_of",
    "enum_member",
    "as_",
    # Reshaping
    "mapper",
    "rename",
    "rename_snake_to_camel",
    "decorate",
    "snake_to_camel",
]
