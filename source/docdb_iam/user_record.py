# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass
from typing import Any, Mapping

from docdb_iam.exceptions import RecordDecodeError


@dataclass(frozen=True)
class UserRecord:
    name: str = ""
    age: int = 0

    def __str__(self) -> str:
        return f"{{{self.name} {self.age}}}"

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "UserRecord":
        """
        Decodes a users document. Fields that are absent or null take their zero value,
        fields of the wrong type are an error.
        """
        return cls(
            name=_decode_name(document.get("name", "")),
            age=_decode_age(document.get("age", 0)),
        )


def _decode_name(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise RecordDecodeError(
            f"Field 'name' must be a string, got {type(value).__name__}"
        )
    return value


def _decode_age(value: Any) -> int:
    if value is None:
        return 0
    # bool is a subclass of int, so True/False decode as 1/0
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise RecordDecodeError(
        f"Field 'age' must be an integer, got {type(value).__name__} {value!r}"
    )
