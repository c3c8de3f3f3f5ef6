from __future__ import annotations

from typing import Optional

from objectives.domain.models.subject import Subject
from objectives.domain.models.vocabulary import Age, Race, SomeoneType

_RACE_TARGETS = {
    SomeoneType.AZURE_PERSON.value: Race.AZURE.value,
    SomeoneType.CRIMSON_PERSON.value: Race.CRIMSON.value,
    SomeoneType.GOLDEN_PERSON.value: Race.GOLDEN.value,
}

_GENERIC_RECIPIENT_TYPES = {"human", "cop"}


def _target_key(target_type) -> str:
    return str(getattr(target_type, "value", target_type) or "")


def is_wildcard(target_type) -> bool:
    key = _target_key(target_type)
    return not key or key == SomeoneType.ANYONE.value


def _matches_person(key: str, subject: Optional[Subject]) -> Optional[bool]:
    """Shared age/race checks; None when ``key`` is not a person category."""
    age = getattr(subject, "age", None)
    if key == SomeoneType.KID.value:
        return age == Age.CHILD.value
    if key == SomeoneType.ADULT.value:
        return age == Age.ADULT.value
    race = _RACE_TARGETS.get(key)
    if race is not None:
        return getattr(subject, "race", None) == race and age == Age.ADULT.value
    return None


def matches_target_type(target_type, subject: Optional[Subject]) -> bool:
    """Whether a killed/followed/captured subject satisfies a target category.

    Unrecognized categories never match.
    """
    if is_wildcard(target_type):
        return True
    if subject is None:
        return False

    key = _target_key(target_type)
    person = _matches_person(key, subject)
    if person is not None:
        return person
    if key == SomeoneType.COP.value:
        return subject.is_cop is True
    if key == SomeoneType.PRISONER.value:
        return subject.is_prisoner is True
    if key in {SomeoneType.DOG.value, SomeoneType.CAT.value}:
        return subject.kind == key
    return False


def matches_gift_recipient(target_type, recipient: Optional[Subject], recipient_type: Optional[str]) -> bool:
    """Whether a gift recipient satisfies a target category.

    Unlike ``matches_target_type``, an unrecognized category falls back to
    "is the recipient a generic person" rather than rejecting.
    """
    if is_wildcard(target_type):
        return True

    key = _target_key(target_type)
    if key in {SomeoneType.DOG.value, SomeoneType.CAT.value, SomeoneType.COP.value}:
        return recipient_type == key
    person = _matches_person(key, recipient)
    if person is not None:
        return person
    return recipient_type in _GENERIC_RECIPIENT_TYPES
