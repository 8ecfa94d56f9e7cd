# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
import pytest
from bson import ObjectId
from bson.int64 import Int64
from docdb_iam.exceptions import RecordDecodeError
from docdb_iam.user_record import UserRecord


def test_from_document_decodes_name_and_age():
    document = {"_id": ObjectId(), "name": "steve", "age": 555}

    record = UserRecord.from_document(document)

    assert record == UserRecord(name="steve", age=555)
    assert str(record) == "{steve 555}"


def test_from_document_accepts_int64_and_whole_doubles():
    assert UserRecord.from_document({"name": "a", "age": Int64(7)}).age == 7
    assert UserRecord.from_document({"name": "a", "age": 7.0}).age == 7


def test_missing_fields_take_zero_values():
    assert UserRecord.from_document({"_id": ObjectId()}) == UserRecord("", 0)


def test_null_fields_take_zero_values():
    document = {"_id": ObjectId(), "name": None, "age": None}

    assert UserRecord.from_document(document) == UserRecord("", 0)


def test_boolean_age_decodes_as_zero_or_one():
    assert UserRecord.from_document({"name": "a", "age": True}).age == 1
    assert UserRecord.from_document({"name": "a", "age": False}).age == 0
    assert type(UserRecord.from_document({"name": "a", "age": True}).age) is int


@pytest.mark.parametrize(
    "document",
    [
        {"name": 42, "age": 1},
        {"name": "steve", "age": "555"},
        {"name": "steve", "age": 55.5},
    ],
)
def test_wrong_types_raise_decode_error(document):
    with pytest.raises(RecordDecodeError):
        UserRecord.from_document(document)
