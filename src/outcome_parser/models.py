from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Type(Enum):
    PASSED = "passed"
    ERROR = "error"
    WARNING = "warning"
    FAILURE = "failure"
    INCOMPLETE = "incomplete"
    RISKY = "risky"
    SKIPPED = "skipped"
    FAILED = "failed"


TYPE_GROUP = MappingProxyType({
    Type.PASSED: Type.PASSED,
    Type.ERROR: Type.ERROR,
    Type.WARNING: Type.SKIPPED,
    Type.FAILURE: Type.ERROR,
    Type.INCOMPLETE: Type.INCOMPLETE,
    Type.RISKY: Type.ERROR,
    Type.SKIPPED: Type.SKIPPED,
    Type.FAILED: Type.ERROR,
})

# Severity order used when summarizing results
TYPE_KEYS = (Type.PASSED, Type.ERROR, Type.INCOMPLETE, Type.SKIPPED)


def type_group(type_: Type) -> Type:
    """Collapse an outcome type into its display severity"""
    try:
        return TYPE_GROUP[type_]
    except (KeyError, TypeError):
        raise ValueError(f"Unknown test case type: {type_!r}") from None


class Detail(BaseModel):
    model_config = ConfigDict(frozen=True)

    file: str
    line: int


class Fault(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str
    type: str | None = None
    details: list[Detail] = []


class TestCase(BaseModel):
    """Outcome of one test, independent of the report format it came from"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str | None = None
    class_: str | None = Field(default=None, alias="class")
    classname: str | None = None
    file: str | None = None
    line: int = 0
    time: float = 0.0
    type: Type = Type.PASSED
    fault: Fault | None = None

    @model_validator(mode="after")
    def _check_fault(self) -> "TestCase":
        if (self.fault is None) != (self.type is Type.PASSED):
            raise ValueError(f"Test case {self.name!r} of type {self.type.value} has inconsistent fault")
        return self

    @property
    def group(self) -> Type:
        return type_group(self.type)
