"""
conformly - composable validation and conformation of structured data.

Usage:
    from conformly import AllOf, IsType, Member, Required, Shape, Transform, validate

    score = AllOf([IsType(str), Transform(lambda s: tuple(s.split("-", 1)))])
    goal = Shape({
        "player_name": Required(IsType(str)),
        "score": Required(score),
        "team_side": Required(Member([1, 2])),
    }, strict=True)

    result = validate(payload, goal)   # Ok(conformed) or Err(ValidationError)
"""

from .combinators import (
    AllOf,
    Each,
    ListOf,
    MapOf,
    OneOf,
    Optional,
    Required,
    SequenceOf,
    Shape,
    ShapeField,
    Tuple,
)
from .core import Composable, describe_validator, is_validator, validate, validate_or_raise
from .errors import (
    NO_TERM,
    ContractViolation,
    EmptyValidatorsError,
    Index,
    InvalidOutcomeError,
    Key,
    NotAValidatorError,
    ValidationError,
)
from .options import (
    CollectOptions,
    Collector,
    DictCollector,
    ListCollector,
    SetCollector,
    ShapeOptions,
    TupleCollector,
)
from .schema import to_validator
from .types import Err, Ok, Validator
from .validators import (
    Between,
    Check,
    IsType,
    Literal,
    Matches,
    Member,
    Model,
    Named,
    Predicate,
    Transform,
)

__all__ = [
    # Result types
    "Ok",
    "Err",
    "Validator",
    # Entry points
    "validate",
    "validate_or_raise",
    "describe_validator",
    "is_validator",
    "to_validator",
    "Composable",
    # Errors
    "ValidationError",
    "Index",
    "Key",
    "NO_TERM",
    "ContractViolation",
    "InvalidOutcomeError",
    "NotAValidatorError",
    "EmptyValidatorsError",
    # Leaf validators
    "Literal",
    "Member",
    "Transform",
    "Named",
    "Check",
    "IsType",
    "Predicate",
    "Matches",
    "Between",
    "Model",
    # Combinators
    "AllOf",
    "OneOf",
    "SequenceOf",
    "Each",
    "ListOf",
    "MapOf",
    "Shape",
    "ShapeField",
    "Required",
    "Optional",
    "Tuple",
    # Options
    "CollectOptions",
    "ShapeOptions",
    "Collector",
    "ListCollector",
    "TupleCollector",
    "SetCollector",
    "DictCollector",
]
