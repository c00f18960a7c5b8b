"""Wire-format conversion for user records.

The record store names the id field ``sid`` and the date of birth ``dob``.
Everything else maps one-to-one.
"""

from __future__ import annotations

from typing import Any

from model.record import Gender, UserRecord

# Record attribute -> JSON key
WIRE_FIELDS: dict[str, str] = {
    "id": "sid",
    "first_name": "first_name",
    "last_name": "last_name",
    "gender": "gender",
    "date_of_birth": "dob",
    "bio": "bio",
}


def record_to_wire(record: UserRecord) -> dict[str, Any]:
    """Encode a record as the JSON body the record store expects."""
    return {
        WIRE_FIELDS["id"]: record.id,
        WIRE_FIELDS["first_name"]: record.first_name,
        WIRE_FIELDS["last_name"]: record.last_name,
        WIRE_FIELDS["gender"]: record.gender.value,
        WIRE_FIELDS["date_of_birth"]: record.date_of_birth,
        WIRE_FIELDS["bio"]: record.bio,
    }


def record_from_wire(data: dict[str, Any]) -> UserRecord:
    """Decode one JSON object from the record store.

    Raises:
        ValueError: if a required key is missing or a value has the wrong shape
    """
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object for a user, got {type(data).__name__}")

    missing = [
        key for name, key in WIRE_FIELDS.items()
        if name != "bio" and key not in data
    ]
    if missing:
        raise ValueError(f"User payload missing fields: {', '.join(missing)}")

    try:
        gender = Gender(data[WIRE_FIELDS["gender"]])
    except ValueError as e:
        raise ValueError(f"Unknown gender: {data[WIRE_FIELDS['gender']]!r}") from e

    record_id = data[WIRE_FIELDS["id"]]
    if isinstance(record_id, bool) or not isinstance(record_id, int):
        raise ValueError(f"User id must be an integer, got {record_id!r}")
    for name in ("first_name", "last_name", "date_of_birth"):
        if not isinstance(data[WIRE_FIELDS[name]], str):
            raise ValueError(f"User {record_id}: '{WIRE_FIELDS[name]}' must be a string")
    bio = data.get(WIRE_FIELDS["bio"])
    if bio is not None and not isinstance(bio, str):
        raise ValueError(f"User {record_id}: 'bio' must be a string or null")

    return UserRecord(
        id=record_id,
        first_name=data[WIRE_FIELDS["first_name"]],
        last_name=data[WIRE_FIELDS["last_name"]],
        gender=gender,
        date_of_birth=data[WIRE_FIELDS["date_of_birth"]],
        bio=bio,
    )


def records_from_wire(payload: Any) -> list[UserRecord]:
    """Decode the list endpoint's JSON array, keeping server order."""
    if not isinstance(payload, list):
        raise ValueError(f"Expected a JSON array of users, got {type(payload).__name__}")
    return [record_from_wire(item) for item in payload]
